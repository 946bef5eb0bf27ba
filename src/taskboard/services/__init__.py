"""Domain service layer package."""

from __future__ import annotations

from .access import ensure_access, parse_identifier, require_found
from .auth import AuthService
from .projects import ProjectService
from .tasks import TaskService, TaskStatisticsResult
from .users import UserService

__all__ = [
    "AuthService",
    "ProjectService",
    "TaskService",
    "TaskStatisticsResult",
    "UserService",
    "ensure_access",
    "parse_identifier",
    "require_found",
]
