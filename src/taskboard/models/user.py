"""User documents stored through Beanie."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel

from .common import utcnow


class UserRole(str, Enum):
    """Roles supported by the authentication system."""

    USER = "user"
    ADMIN = "admin"


class User(Document):
    """Persistent user account."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=320)
    hashed_password: str
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "users"
        indexes = [
            IndexModel([("email", ASCENDING)], name="users_email_unique", unique=True),
        ]


__all__ = ["User", "UserRole"]
