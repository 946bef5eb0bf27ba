"""Repository for interacting with task documents."""

from __future__ import annotations

from beanie import PydanticObjectId
from motor.motor_asyncio import AsyncIOMotorClientSession

from ..models import Task, TaskPriority, TaskStatus
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    def __init__(self) -> None:
        super().__init__(Task)

    async def list_for_assignee(
        self,
        assignee_id: PydanticObjectId,
        *,
        project_id: PydanticObjectId | None = None,
    ) -> list[Task]:
        """Return tasks assigned to the user, newest first, optionally for one project."""
        query = Task.find(Task.assigned_to == assignee_id)
        if project_id is not None:
            query = query.find(Task.project == project_id)
        return await query.sort("-created_at", "-_id").to_list()

    async def count_by_status(self, assignee_id: PydanticObjectId) -> dict[TaskStatus, int]:
        """Count the assignee's tasks in each status."""
        counts: dict[TaskStatus, int] = {}
        for status in TaskStatus:
            counts[status] = await Task.find(
                Task.assigned_to == assignee_id,
                Task.status == status,
            ).count()
        return counts

    async def count_by_priority(
        self,
        assignee_id: PydanticObjectId,
        priority: TaskPriority,
    ) -> int:
        """Count the assignee's tasks with the given priority."""
        return await Task.find(
            Task.assigned_to == assignee_id,
            Task.priority == priority,
        ).count()

    async def delete_for_project(
        self,
        project_id: PydanticObjectId,
        *,
        session: AsyncIOMotorClientSession | None = None,
    ) -> int:
        """Delete every task referencing the project and return how many were removed."""
        result = await Task.find(Task.project == project_id, session=session).delete(session=session)
        return result.deleted_count if result is not None else 0
