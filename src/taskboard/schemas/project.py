"""Project-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import ConfigDict, Field, model_validator

from .base import CamelModel
from .user import UserSummary

PROJECT_READ_EXAMPLE = {
    "id": "665f1c2e8b3f4a0012a1b2c3",
    "title": "Website relaunch",
    "description": "Everything needed to ship the new marketing site.",
    "owner": {
        "id": "665f1bf08b3f4a0012a1b2c0",
        "name": "Jane Example",
        "email": "jane@example.com",
    },
    "createdAt": "2024-06-04T12:00:00Z",
}


class ProjectCreate(CamelModel):
    """Payload for creating a new project."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Website relaunch",
                "description": "Everything needed to ship the new marketing site.",
            }
        },
    )

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class ProjectUpdate(CamelModel):
    """Payload for partially updating a project; omitted fields are kept."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={"example": {"title": "Website relaunch (phase 2)"}},
    )

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "ProjectUpdate":
        for name in sorted(self.model_fields_set):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ProjectSummary(CamelModel):
    """Compact project reference embedded in tasks."""

    id: PydanticObjectId
    title: str


class ProjectRead(CamelModel):
    """Public representation of a project."""

    model_config = ConfigDict(json_schema_extra={"example": PROJECT_READ_EXAMPLE})

    id: PydanticObjectId
    title: str
    description: str
    owner: UserSummary
    created_at: datetime


__all__ = ["ProjectCreate", "ProjectRead", "ProjectSummary", "ProjectUpdate"]
