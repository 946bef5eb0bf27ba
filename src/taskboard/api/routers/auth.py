"""Routes handling user authentication flows."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...core.config import Settings
from ...core.security import GeneratedToken
from ...deps import AuthServiceDependency, CurrentUserDependency, SettingsDependency
from ...errors import AuthenticationError
from ...models import User
from ...schemas import AuthResponse, LoginRequest, RegisterRequest, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User, token: GeneratedToken, settings: Settings) -> AuthResponse:
    return AuthResponse(
        user=UserPublic.model_validate(user),
        token=token.token,
        expires_in=settings.access_token_expire_minutes * 60,
        expires_at=token.expires_at,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    payload: RegisterRequest,
    service: AuthServiceDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    user = await service.register_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return _auth_response(user, service.issue_token(user), settings)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate using email and password",
)
async def login(
    payload: LoginRequest,
    service: AuthServiceDependency,
    settings: SettingsDependency,
) -> AuthResponse:
    user = await service.authenticate_user(payload.email, payload.password)
    if user is None:
        raise AuthenticationError("Invalid credentials.", code="invalid_credentials")
    return _auth_response(user, service.issue_token(user), settings)


@router.get("/me", response_model=UserPublic, summary="Return the authenticated user")
async def read_current_user(current_user: CurrentUserDependency) -> UserPublic:
    return UserPublic.model_validate(current_user)
