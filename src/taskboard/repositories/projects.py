"""Repository for interacting with project documents."""

from __future__ import annotations

from typing import Sequence

from beanie import PydanticObjectId
from beanie.operators import In

from ..models import Project
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Concrete repository encapsulating ``Project`` persistence operations."""

    def __init__(self) -> None:
        super().__init__(Project)

    async def list_for_owner(self, owner_id: PydanticObjectId) -> list[Project]:
        """Return the owner's projects, newest first."""
        return await Project.find(Project.owner == owner_id).sort("-created_at", "-_id").to_list()

    async def get_for_owner(
        self,
        project_id: PydanticObjectId,
        owner_id: PydanticObjectId,
    ) -> Project | None:
        """Retrieve a project by ID only if it belongs to the provided owner."""
        return await Project.find_one(Project.id == project_id, Project.owner == owner_id)

    async def list_by_ids(self, ids: Sequence[PydanticObjectId]) -> list[Project]:
        """Fetch all projects whose IDs are contained in the provided sequence."""
        if not ids:
            return []
        return await Project.find(In(Project.id, list(ids))).to_list()
