"""Routes handling project CRUD operations."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import CurrentUserDependency, ProjectServiceDependency
from ...models import Project, User
from ...schemas import (
    MessageResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    UserSummary,
)

router = APIRouter(prefix="/projects", tags=["projects"])


def _map_project(project: Project, owner: User) -> ProjectRead:
    # Every project that reaches a response is owned by the caller.
    return ProjectRead(
        id=project.id,
        title=project.title,
        description=project.description,
        owner=UserSummary.model_validate(owner),
        created_at=project.created_at,
    )


@router.get("", response_model=list[ProjectRead], summary="List the caller's projects")
async def list_projects(
    service: ProjectServiceDependency,
    current_user: CurrentUserDependency,
) -> list[ProjectRead]:
    projects = await service.list_projects(current_user.id)
    return [_map_project(project, current_user) for project in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
)
async def create_project(
    payload: ProjectCreate,
    service: ProjectServiceDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    project = await service.create_project(
        owner_id=current_user.id,
        title=payload.title,
        description=payload.description,
    )
    return _map_project(project, current_user)


@router.get("/{project_id}", response_model=ProjectRead, summary="Retrieve a project by id")
async def get_project(
    project_id: str,
    service: ProjectServiceDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    project = await service.get_project(project_id, current_user.id)
    return _map_project(project, current_user)


@router.put("/{project_id}", response_model=ProjectRead, summary="Update a project")
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    service: ProjectServiceDependency,
    current_user: CurrentUserDependency,
) -> ProjectRead:
    project = await service.update_project(
        project_id,
        current_user.id,
        payload.model_dump(exclude_unset=True),
    )
    return _map_project(project, current_user)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete a project and every task in it",
)
async def delete_project(
    project_id: str,
    service: ProjectServiceDependency,
    current_user: CurrentUserDependency,
) -> MessageResponse:
    await service.delete_project(project_id, current_user.id)
    return MessageResponse(message="Project and associated tasks removed")
