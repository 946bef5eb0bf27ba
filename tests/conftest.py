from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from taskboard.core.config import Settings
from taskboard.db import DocumentStore
from taskboard.main import create_app

RegisterUser = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        environment="test",
        jwt_secret_key="test-secret-key",
        log_format="json",
    )


@pytest_asyncio.fixture
async def store() -> AsyncIterator[DocumentStore]:
    client = AsyncMongoMockClient()
    document_store = DocumentStore(client, f"taskboard_test_{uuid4().hex}")
    await document_store.initialize()
    yield document_store


@pytest.fixture()
def app(settings: Settings, store: DocumentStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture()
def register_user(client: AsyncClient) -> RegisterUser:
    """Register an account and return its payload plus ready-made auth headers."""

    async def _register(
        name: str = "Alice Example",
        email: str | None = None,
        password: str = "Secret123!",
    ) -> dict[str, Any]:
        email = email or f"user-{uuid4().hex[:8]}@example.com"
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        payload = response.json()
        payload["headers"] = {"Authorization": f"Bearer {payload['token']}"}
        return payload

    return _register
