"""Routes handling task CRUD operations."""

from __future__ import annotations

from typing import Annotated

from beanie import PydanticObjectId
from fastapi import APIRouter, Query, status

from ...deps import CurrentUserDependency, TaskServiceDependency
from ...models import Project, Task, User
from ...schemas import (
    MessageResponse,
    ProjectSummary,
    TaskCreate,
    TaskRead,
    TaskStatistics,
    TaskUpdate,
    UserSummary,
)
from ...services import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

ProjectQuery = Annotated[
    PydanticObjectId | None,
    Query(description="Restrict results to tasks in the given project."),
]


def _map_task(task: Task, project: Project | None, assignee: User) -> TaskRead:
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        due_date=task.due_date,
        project=ProjectSummary.model_validate(project) if project is not None else None,
        assigned_to=UserSummary.model_validate(assignee),
        created_at=task.created_at,
    )


async def _map_tasks(service: TaskService, tasks: list[Task], assignee: User) -> list[TaskRead]:
    projects = await service.get_projects_for(tasks)
    return [_map_task(task, projects.get(task.project), assignee) for task in tasks]


@router.get("", response_model=list[TaskRead], summary="List the caller's tasks")
async def list_tasks(
    service: TaskServiceDependency,
    current_user: CurrentUserDependency,
    project: ProjectQuery = None,
) -> list[TaskRead]:
    tasks = await service.list_tasks(current_user.id, project_id=project)
    return await _map_tasks(service, tasks, current_user)


@router.get(
    "/stats/summary",
    response_model=TaskStatistics,
    summary="Dashboard counters for the caller's tasks",
)
async def get_task_statistics(
    service: TaskServiceDependency,
    current_user: CurrentUserDependency,
) -> TaskStatistics:
    stats = await service.get_task_statistics(current_user.id)
    return TaskStatistics(
        total=stats.total,
        todo=stats.todo,
        in_progress=stats.in_progress,
        done=stats.done,
        high_priority=stats.high_priority,
    )


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task in one of the caller's projects",
)
async def create_task(
    payload: TaskCreate,
    service: TaskServiceDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    task = await service.create_task(
        assignee_id=current_user.id,
        project_id=payload.project,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        due_date=payload.due_date,
    )
    [read] = await _map_tasks(service, [task], current_user)
    return read


@router.get("/{task_id}", response_model=TaskRead, summary="Retrieve a task by id")
async def get_task(
    task_id: str,
    service: TaskServiceDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    task = await service.get_task(task_id, current_user.id)
    [read] = await _map_tasks(service, [task], current_user)
    return read


@router.put("/{task_id}", response_model=TaskRead, summary="Update a task")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    service: TaskServiceDependency,
    current_user: CurrentUserDependency,
) -> TaskRead:
    task = await service.update_task(
        task_id,
        current_user.id,
        payload.model_dump(exclude_unset=True),
    )
    [read] = await _map_tasks(service, [task], current_user)
    return read


@router.delete("/{task_id}", response_model=MessageResponse, summary="Delete a task")
async def delete_task(
    task_id: str,
    service: TaskServiceDependency,
    current_user: CurrentUserDependency,
) -> MessageResponse:
    await service.delete_task(task_id, current_user.id)
    return MessageResponse(message="Task removed")
