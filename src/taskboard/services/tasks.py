"""Service layer encapsulating task-related operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from beanie import PydanticObjectId

from ..errors import NotFoundError
from ..models import Project, Task, TaskPriority, TaskStatus
from ..repositories import ProjectRepository, TaskRepository
from .access import ensure_access, parse_identifier, require_found

_UPDATABLE_FIELDS = frozenset({"title", "description", "status", "priority", "due_date"})


@dataclass(slots=True)
class TaskStatisticsResult:
    """Dashboard counters for one assignee."""

    total: int
    todo: int
    in_progress: int
    done: int
    high_priority: int


class TaskService:
    """High-level business orchestration for ``Task`` documents."""

    def __init__(self) -> None:
        self._repository = TaskRepository()
        self._project_repository = ProjectRepository()

    async def list_tasks(
        self,
        assignee_id: PydanticObjectId,
        *,
        project_id: PydanticObjectId | None = None,
    ) -> list[Task]:
        """Return the caller's tasks, optionally restricted to one project."""
        return await self._repository.list_for_assignee(assignee_id, project_id=project_id)

    async def get_task_statistics(self, assignee_id: PydanticObjectId) -> TaskStatisticsResult:
        """Count the caller's tasks per status plus the high priority ones."""
        by_status = await self._repository.count_by_status(assignee_id)
        high_priority = await self._repository.count_by_priority(assignee_id, TaskPriority.HIGH)
        return TaskStatisticsResult(
            total=sum(by_status.values()),
            todo=by_status.get(TaskStatus.TODO, 0),
            in_progress=by_status.get(TaskStatus.IN_PROGRESS, 0),
            done=by_status.get(TaskStatus.DONE, 0),
            high_priority=high_priority,
        )

    async def create_task(
        self,
        *,
        assignee_id: PydanticObjectId,
        project_id: str,
        title: str,
        description: str = "",
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
    ) -> Task:
        """Create a task in one of the caller's projects, assigned to the caller."""
        project = None
        if PydanticObjectId.is_valid(project_id):
            project = await self._project_repository.get_for_owner(
                PydanticObjectId(project_id),
                assignee_id,
            )
        if project is None:
            raise NotFoundError("Project not found or not authorized.")
        task = Task(
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            project=project.id,
            assigned_to=assignee_id,
        )
        return await self._repository.add(task)

    async def get_task(self, task_id: str, identity: PydanticObjectId) -> Task:
        """Load a task assigned to the caller."""
        identifier = parse_identifier(task_id, resource="Task")
        task = require_found(await self._repository.get(identifier), resource="Task")
        ensure_access(identity, task.assigned_to, resource="Task")
        return task

    async def update_task(
        self,
        task_id: str,
        identity: PydanticObjectId,
        changes: Mapping[str, Any],
    ) -> Task:
        """Overwrite the fields present in ``changes`` and keep the rest."""
        task = await self.get_task(task_id, identity)
        for field, value in changes.items():
            if field in _UPDATABLE_FIELDS:
                setattr(task, field, value)
        return await self._repository.save(task)

    async def delete_task(self, task_id: str, identity: PydanticObjectId) -> None:
        """Delete a task assigned to the caller."""
        task = await self.get_task(task_id, identity)
        await self._repository.delete(task)

    async def get_projects_for(self, tasks: list[Task]) -> dict[PydanticObjectId, Project]:
        """Fetch the parent projects referenced by ``tasks`` keyed by id."""
        ids = list(dict.fromkeys(task.project for task in tasks))
        projects = await self._project_repository.list_by_ids(ids)
        return {project.id: project for project in projects if project.id is not None}


__all__ = ["TaskService", "TaskStatisticsResult"]
