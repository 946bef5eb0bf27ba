"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId

from ..models import UserRole
from .base import CamelModel


class UserSummary(CamelModel):
    """Compact user reference embedded in projects and tasks."""

    id: PydanticObjectId
    name: str
    email: str


class UserPublic(UserSummary):
    """Public representation of a user; never carries the password hash."""

    role: UserRole
    created_at: datetime


__all__ = ["UserPublic", "UserSummary"]
