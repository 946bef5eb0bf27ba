"""Document repositories encapsulating persistence logic."""

from __future__ import annotations

from .projects import ProjectRepository
from .tasks import TaskRepository
from .users import UserRepository

__all__ = ["ProjectRepository", "TaskRepository", "UserRepository"]
