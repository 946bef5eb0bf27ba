"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import ConfigDict, Field, field_validator, model_validator

from ..models import TaskPriority, TaskStatus
from .base import CamelModel
from .project import ProjectSummary
from .user import UserSummary

TASK_READ_EXAMPLE = {
    "id": "665f1d418b3f4a0012a1b2c9",
    "title": "Draft landing page copy",
    "description": "Hero, features and pricing sections.",
    "status": TaskStatus.TODO.value,
    "priority": TaskPriority.MEDIUM.value,
    "dueDate": "2024-06-30T00:00:00Z",
    "project": {"id": "665f1c2e8b3f4a0012a1b2c3", "title": "Website relaunch"},
    "assignedTo": {
        "id": "665f1bf08b3f4a0012a1b2c0",
        "name": "Jane Example",
        "email": "jane@example.com",
    },
    "createdAt": "2024-06-04T12:05:00Z",
}

TASK_STATISTICS_EXAMPLE = {
    "total": 3,
    "todo": 1,
    "inProgress": 1,
    "done": 1,
    "highPriority": 2,
}

_NON_NULLABLE_UPDATE_FIELDS = frozenset({"title", "description", "status", "priority"})


class TaskCreate(CamelModel):
    """Payload for creating a new task inside one of the caller's projects."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Draft landing page copy",
                "description": "Hero, features and pricing sections.",
                "priority": TaskPriority.HIGH.value,
                "dueDate": "2024-06-30T00:00:00Z",
                "project": "665f1c2e8b3f4a0012a1b2c3",
            }
        },
    )

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")
    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: datetime | None = Field(default=None)
    project: str = Field(min_length=1, description="Identifier of the parent project.")

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: object) -> object:
        return TaskStatus.TODO if value in (None, "") else value

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: object) -> object:
        return TaskPriority.MEDIUM if value in (None, "") else value


class TaskUpdate(CamelModel):
    """Payload for partially updating a task; omitted fields are kept."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "status": TaskStatus.IN_PROGRESS.value,
                "dueDate": None,
            }
        },
    )

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None)
    status: TaskStatus | None = Field(default=None)
    priority: TaskPriority | None = Field(default=None)
    due_date: datetime | None = Field(default=None)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "TaskUpdate":
        for name in sorted(self.model_fields_set & _NON_NULLABLE_UPDATE_FIELDS):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class TaskRead(CamelModel):
    """Public representation of a task."""

    model_config = ConfigDict(json_schema_extra={"example": TASK_READ_EXAMPLE})

    id: PydanticObjectId
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    project: ProjectSummary | None = Field(
        default=None,
        description="Parent project, or null when it no longer exists.",
    )
    assigned_to: UserSummary
    created_at: datetime


class TaskStatistics(CamelModel):
    """Dashboard counters for the caller's tasks."""

    model_config = ConfigDict(json_schema_extra={"example": TASK_STATISTICS_EXAMPLE})

    total: int = Field(ge=0)
    todo: int = Field(ge=0)
    in_progress: int = Field(ge=0)
    done: int = Field(ge=0)
    high_priority: int = Field(ge=0)


__all__ = [
    "TaskCreate",
    "TaskRead",
    "TaskStatistics",
    "TaskUpdate",
]
