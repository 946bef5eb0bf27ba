"""Task documents stored through Beanie."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from beanie import Document, PydanticObjectId
from pydantic import ConfigDict, Field
from pymongo import ASCENDING, DESCENDING, IndexModel

from .common import utcnow


class TaskStatus(str, Enum):
    """Columns of the task board."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskPriority(str, Enum):
    """Relative urgency of a task."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Task(Document):
    """A unit of work inside a project, assigned to the user who created it."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    project: PydanticObjectId
    assigned_to: PydanticObjectId
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "tasks"
        validate_on_save = True
        indexes = [
            IndexModel([("assigned_to", ASCENDING), ("created_at", DESCENDING)], name="tasks_assignee"),
            IndexModel([("project", ASCENDING)], name="tasks_project"),
        ]


__all__ = ["Task", "TaskPriority", "TaskStatus"]
