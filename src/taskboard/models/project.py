"""Project documents stored through Beanie."""

from __future__ import annotations

from datetime import datetime

from beanie import Document, PydanticObjectId
from pydantic import ConfigDict, Field
from pymongo import ASCENDING, DESCENDING, IndexModel

from .common import utcnow


class Project(Document):
    """A named grouping of tasks owned by exactly one user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    owner: PydanticObjectId
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "projects"
        validate_on_save = True
        indexes = [
            IndexModel([("owner", ASCENDING), ("created_at", DESCENDING)], name="projects_owner"),
        ]


__all__ = ["Project"]
