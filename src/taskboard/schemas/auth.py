"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..core.security import BCRYPT_MAX_PASSWORD_BYTES, TokenType
from .base import CamelModel
from .user import UserPublic


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Jane Example",
                "email": "jane@example.com",
                "password": "StrongPass123!",
            }
        },
    )

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must not be blank")
        return name

    @field_validator("password")
    @classmethod
    def _fit_bcrypt_limit(cls, value: str) -> str:
        # bcrypt ignores everything past the first 72 bytes.
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Credentials exchanged for a bearer token."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    """Authenticated user together with a freshly issued bearer token."""

    user: UserPublic
    token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int
    expires_at: datetime


class TokenPayload(BaseModel):
    """Validated JWT payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    exp: datetime
    iat: datetime
    jti: str
    roles: list[str] = Field(default_factory=list)
    type: TokenType


__all__ = ["AuthResponse", "LoginRequest", "RegisterRequest", "TokenPayload"]
