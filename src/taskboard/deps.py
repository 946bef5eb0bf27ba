"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from .core.config import Settings, get_settings
from .db import DocumentStore
from .errors import StoreError
from .models import User
from .services import AuthService, ProjectService, TaskService

SettingsDependency = Annotated[Settings, Depends(get_settings)]

# The login route takes JSON, so this scheme is only used to read the header.
_bearer_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_document_store(request: Request) -> DocumentStore:
    """Return the document store opened at application startup."""

    store = getattr(request.app.state, "store", None)
    if store is None or not store.initialized:
        raise StoreError("Document store is not available.")
    return store


DocumentStoreDependency = Annotated[DocumentStore, Depends(get_document_store)]


def get_auth_service(settings: SettingsDependency, _: DocumentStoreDependency) -> AuthService:
    return AuthService(settings)


def get_project_service(store: DocumentStoreDependency) -> ProjectService:
    return ProjectService(store)


def get_task_service(_: DocumentStoreDependency) -> TaskService:
    return TaskService()


AuthServiceDependency = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDependency = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDependency = Annotated[TaskService, Depends(get_task_service)]


async def get_current_user(
    service: AuthServiceDependency,
    token: str | None = Depends(_bearer_scheme),
) -> User:
    """Resolve the bearer token before any protected handler runs."""

    return await service.get_current_user(token)


CurrentUserDependency = Annotated[User, Depends(get_current_user)]


__all__ = [
    "AuthServiceDependency",
    "CurrentUserDependency",
    "DocumentStoreDependency",
    "ProjectServiceDependency",
    "SettingsDependency",
    "TaskServiceDependency",
    "get_current_user",
    "get_document_store",
]
