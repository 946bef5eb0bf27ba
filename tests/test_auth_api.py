from __future__ import annotations

from datetime import timedelta

import pytest
from beanie import PydanticObjectId
from fastapi import status
from httpx import AsyncClient
from jose import jwt

from taskboard.core.config import Settings
from taskboard.core.security import TokenType, create_access_token
from taskboard.models import User

pytestmark = pytest.mark.asyncio


async def test_register_returns_user_and_token(client: AsyncClient, settings: Settings) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "Alice@Example.COM", "password": "Secret123!"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    payload = response.json()
    assert payload["tokenType"] == "bearer"
    assert payload["expiresIn"] == settings.access_token_expire_minutes * 60
    user = payload["user"]
    assert user["name"] == "Alice"
    assert user["email"] == "alice@example.com"
    assert user["role"] == "user"
    assert "hashedPassword" not in user
    assert "password" not in user

    claims = jwt.decode(payload["token"], settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert claims["sub"] == user["id"]
    assert claims["type"] == TokenType.ACCESS.value


async def test_register_stores_only_a_password_hash(client: AsyncClient) -> None:
    await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "Secret123!"},
    )

    stored = await User.find_one(User.email == "alice@example.com")
    assert stored is not None
    assert stored.hashed_password != "Secret123!"
    assert stored.hashed_password.startswith("$2")


async def test_register_rejects_duplicate_email(client: AsyncClient, register_user) -> None:
    await register_user(email="dup@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "DUP@example.com", "password": "another"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    payload = response.json()
    assert payload["code"] == "duplicate_email"
    assert payload["message"] == "User already exists."
    assert await User.find(User.email == "dup@example.com").count() == 1


async def test_register_requires_all_fields(client: AsyncClient) -> None:
    response = await client.post("/api/auth/register", json={"email": "x@example.com"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    payload = response.json()
    assert payload["code"] == "validation_error"
    assert payload["message"] == "Please provide all required fields: name, password."


async def test_register_rejects_malformed_email(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "not-an-email", "password": "Secret123!"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "validation_error"


async def test_login_with_valid_credentials(client: AsyncClient, register_user) -> None:
    registered = await register_user(email="bob@example.com", password="hunter2!")

    response = await client.post(
        "/api/auth/login",
        json={"email": "Bob@Example.com", "password": "hunter2!"},
    )

    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["user"]["id"] == registered["user"]["id"]
    assert payload["token"]


@pytest.mark.parametrize(
    ("email", "password"),
    [
        ("bob@example.com", "wrong-password"),
        ("nobody@example.com", "hunter2!"),
    ],
)
async def test_login_rejects_bad_credentials(
    client: AsyncClient,
    register_user,
    email: str,
    password: str,
) -> None:
    await register_user(email="bob@example.com", password="hunter2!")

    response = await client.post("/api/auth/login", json={"email": email, "password": password})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    payload = response.json()
    assert payload["code"] == "invalid_credentials"
    assert payload["message"] == "Invalid credentials."


async def test_me_returns_current_user(client: AsyncClient, register_user) -> None:
    registered = await register_user(name="Carol")

    response = await client.get("/api/auth/me", headers=registered["headers"])

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == registered["user"]["id"]
    assert response.json()["name"] == "Carol"


async def test_protected_route_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/projects")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "token_missing"
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_protected_route_rejects_garbage_token(client: AsyncClient) -> None:
    response = await client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "token_invalid"


async def test_protected_route_rejects_token_signed_with_other_secret(
    client: AsyncClient,
    register_user,
    settings: Settings,
) -> None:
    registered = await register_user()
    foreign = create_access_token(
        subject=registered["user"]["id"],
        roles=["user"],
        settings=settings.model_copy(update={"jwt_secret_key": "someone-else"}),
    )

    response = await client.get(
        "/api/tasks",
        headers={"Authorization": f"Bearer {foreign.token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "token_invalid"


async def test_protected_route_rejects_expired_token(
    client: AsyncClient,
    register_user,
    settings: Settings,
) -> None:
    registered = await register_user()
    expired = create_access_token(
        subject=registered["user"]["id"],
        roles=["user"],
        settings=settings,
        expires_delta=timedelta(minutes=-5),
    )

    response = await client.get(
        "/api/projects",
        headers={"Authorization": f"Bearer {expired.token}"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "token_expired"


async def test_token_for_deleted_user_is_rejected(client: AsyncClient, register_user) -> None:
    registered = await register_user()
    user = await User.get(PydanticObjectId(registered["user"]["id"]))
    assert user is not None
    await user.delete()

    response = await client.get("/api/auth/me", headers=registered["headers"])

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "User no longer exists."


async def test_register_rejects_password_longer_than_bcrypt_limit(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"name": "Long", "email": "long@example.com", "password": "p" * 73},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "validation_error"
    assert await User.find(User.email == "long@example.com").count() == 0


async def test_register_accepts_password_at_bcrypt_limit(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"name": "Edge", "email": "edge@example.com", "password": "p" * 72},
    )

    assert response.status_code == status.HTTP_201_CREATED
