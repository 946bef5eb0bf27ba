"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AuthResponse, LoginRequest, RegisterRequest, TokenPayload
from .project import ProjectCreate, ProjectRead, ProjectSummary, ProjectUpdate
from .system import ErrorResponse, HealthCheckResponse, MessageResponse, RootResponse
from .task import TaskCreate, TaskRead, TaskStatistics, TaskUpdate
from .user import UserPublic, UserSummary

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "MessageResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectSummary",
    "ProjectUpdate",
    "RegisterRequest",
    "RootResponse",
    "TaskCreate",
    "TaskRead",
    "TaskStatistics",
    "TaskUpdate",
    "TokenPayload",
    "UserPublic",
    "UserSummary",
]
