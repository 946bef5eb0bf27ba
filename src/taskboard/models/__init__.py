"""Document models exposed by the taskboard API."""

from __future__ import annotations

from .common import utcnow
from .project import Project
from .task import Task, TaskPriority, TaskStatus
from .user import User, UserRole

DOCUMENT_MODELS = [User, Project, Task]

__all__ = [
    "DOCUMENT_MODELS",
    "Project",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
    "UserRole",
    "utcnow",
]
