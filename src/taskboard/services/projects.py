"""Service layer encapsulating project-related operations."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from beanie import PydanticObjectId

from ..db import DocumentStore
from ..models import Project
from ..repositories import ProjectRepository, TaskRepository
from .access import ensure_access, parse_identifier, require_found

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"title", "description"})


class ProjectService:
    """High-level business orchestration for ``Project`` documents."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._repository = ProjectRepository()
        self._task_repository = TaskRepository()

    async def list_projects(self, owner_id: PydanticObjectId) -> list[Project]:
        """Return the owner's projects, newest first."""
        return await self._repository.list_for_owner(owner_id)

    async def create_project(
        self,
        *,
        owner_id: PydanticObjectId,
        title: str,
        description: str,
    ) -> Project:
        """Create a new project owned by ``owner_id``."""
        project = Project(title=title, description=description, owner=owner_id)
        return await self._repository.add(project)

    async def _get_owned(self, identifier: PydanticObjectId, identity: PydanticObjectId) -> Project:
        project = require_found(await self._repository.get(identifier), resource="Project")
        ensure_access(identity, project.owner, resource="Project")
        return project

    async def get_project(self, project_id: str, identity: PydanticObjectId) -> Project:
        """Load a project the caller owns."""
        identifier = parse_identifier(project_id, resource="Project")
        return await self._get_owned(identifier, identity)

    async def update_project(
        self,
        project_id: str,
        identity: PydanticObjectId,
        changes: Mapping[str, Any],
    ) -> Project:
        """Overwrite the fields present in ``changes`` and keep the rest."""
        project = await self.get_project(project_id, identity)
        for field, value in changes.items():
            if field in _UPDATABLE_FIELDS:
                setattr(project, field, value)
        return await self._repository.save(project)

    async def delete_project(self, project_id: str, identity: PydanticObjectId) -> int:
        """Delete a project together with its tasks and return the task count removed."""
        identifier = parse_identifier(project_id, resource="Project")
        project = await self._get_owned(identifier, identity)
        async with self._store.transaction() as session:
            removed = await self._task_repository.delete_for_project(identifier, session=session)
            await self._repository.delete(project, session=session)
        logger.info(
            "Project deleted",
            extra={"project_id": str(identifier), "tasks_removed": removed},
        )
        return removed


__all__ = ["ProjectService"]
