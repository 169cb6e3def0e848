"""
Project management router.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, status, Query

from buildtrack.config import settings
from buildtrack.infrastructure.auth import get_current_user_id
from buildtrack.application.dto.base_dto import BlankAsNone
from buildtrack.application.use_cases.project_use_cases import (
    CreateProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    UpdateProjectUseCase,
    DeleteProjectUseCase
)
from buildtrack.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    ListProjectsRequestDTO
)
from buildtrack.domain.models.project import ProjectStatus
from buildtrack.infrastructure.db.database import get_db
from buildtrack.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from buildtrack.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from buildtrack.infrastructure.web.results import unwrap


router = APIRouter()


def get_project_repository(session=Depends(get_db)):
    """Dependency to get project repository."""
    return SQLAlchemyProjectRepository(session)


def get_task_repository(session=Depends(get_db)):
    return SQLAlchemyTaskRepository(session)


ProjectRepositoryDep = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]
UserIdDep = Annotated[str, Depends(get_current_user_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectRequestDTO,
    user_id: UserIdDep,
    repository: ProjectRepositoryDep
):
    """Create a new project. Only **name** is required."""
    use_case = CreateProjectUseCase(repository)
    project = unwrap(await use_case.execute(request))
    return {"message": "Project created successfully", "project": project.to_response()}


@router.get("")
async def list_projects(
    user_id: UserIdDep,
    repository: ProjectRepositoryDep,
    search: Annotated[Optional[str], BlankAsNone, Query(max_length=255, description="Search projects by name")] = None,
    status: Annotated[Optional[ProjectStatus], BlankAsNone, Query(description="Filter by project status")] = None,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.default_page_size, ge=1, description="Items per page")
):
    """List projects, newest first."""
    request = ListProjectsRequestDTO(search=search, status=status, page=page, page_size=limit)
    use_case = ListProjectsUseCase(repository, settings.default_page_size, settings.max_page_size)
    return unwrap(await use_case.execute(request)).to_response()


@router.get("/{project_id}")
async def get_project(
    project_id: int,
    user_id: UserIdDep,
    repository: ProjectRepositoryDep
):
    """Get a project by ID."""
    use_case = GetProjectUseCase(repository)
    project = unwrap(await use_case.execute(project_id))
    return {"project": project.to_response()}


@router.put("/{project_id}")
async def update_project(
    project_id: int,
    request: UpdateProjectRequestDTO,
    user_id: UserIdDep,
    repository: ProjectRepositoryDep
):
    """Update project fields present in the body."""
    request.id = project_id
    use_case = UpdateProjectUseCase(repository)
    project = unwrap(await use_case.execute(request))
    return {"message": "Project updated successfully", "project": project.to_response()}


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    user_id: UserIdDep,
    repository: ProjectRepositoryDep,
    task_repository: Annotated[SQLAlchemyTaskRepository, Depends(get_task_repository)]
):
    """Delete a project. Rejected with 409 while the project still has tasks."""
    use_case = DeleteProjectUseCase(repository, task_repository)
    unwrap(await use_case.execute(project_id))
    return {"message": "Project deleted successfully"}
