"""
Project use cases for the application layer.
Implements business logic for project operations.
"""

from buildtrack.application.use_cases.base_use_case import (
    CreateUseCase, UpdateUseCase, DeleteUseCase, GetByIdUseCase, ListUseCase
)
from buildtrack.application.dto.base_dto import PaginationDTO
from buildtrack.application.dto.project_dto import (
    CreateProjectRequestDTO, UpdateProjectRequestDTO, ListProjectsRequestDTO,
    ProjectResponseDTO, ProjectListResponseDTO
)
from buildtrack.domain.models.base import EntityNotFoundError, BusinessRuleViolation
from buildtrack.domain.models.project import Project
from buildtrack.domain.repositories.project_repository import ProjectRepository
from buildtrack.domain.repositories.task_repository import TaskRepository


class CreateProjectUseCase(CreateUseCase[CreateProjectRequestDTO, ProjectResponseDTO]):
    """Use case for creating a new project."""

    def __init__(self, project_repository: ProjectRepository):
        super().__init__()
        self.project_repository = project_repository

    async def _execute_command_logic(self, request: CreateProjectRequestDTO) -> ProjectResponseDTO:
        project = Project(
            name=request.name.strip(),
            client=request.client,
            location=request.location,
            status=request.status,
            priority=request.priority,
            owner=request.owner,
            description=request.description,
            currency=request.currency.upper(),
            budget=request.budget,
            start_date=request.start_date,
            deadline=request.deadline,
            progress=request.progress
        )

        saved_project = await self.project_repository.save(project)
        return ProjectResponseDTO.from_domain(saved_project)


class GetProjectUseCase(GetByIdUseCase[int, ProjectResponseDTO]):
    """Use case for getting a project by ID."""

    def __init__(self, project_repository: ProjectRepository):
        super().__init__()
        self.project_repository = project_repository

    async def _execute_business_logic(self, project_id: int) -> ProjectResponseDTO:
        project = await self.project_repository.find_by_id(project_id)
        if not project:
            raise EntityNotFoundError("Project", project_id)
        return ProjectResponseDTO.from_domain(project)


class ListProjectsUseCase(ListUseCase[ListProjectsRequestDTO, ProjectListResponseDTO]):
    """Use case for listing projects."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        default_page_size: int = 10,
        max_page_size: int = 100
    ):
        super().__init__(default_page_size, max_page_size)
        self.project_repository = project_repository

    async def _execute_business_logic(self, request: ListProjectsRequestDTO) -> ProjectListResponseDTO:
        page = await self.project_repository.find_page(
            search=request.search,
            status=request.status,
            page=request.page,
            page_size=self._page_size(request.page_size)
        )

        return ProjectListResponseDTO(
            projects=[ProjectResponseDTO.from_domain(project) for project in page.items],
            pagination=PaginationDTO.from_page(page)
        )


class UpdateProjectUseCase(UpdateUseCase[UpdateProjectRequestDTO, ProjectResponseDTO]):
    """Use case for updating project information."""

    def __init__(self, project_repository: ProjectRepository):
        super().__init__()
        self.project_repository = project_repository

    async def _execute_command_logic(self, request: UpdateProjectRequestDTO) -> ProjectResponseDTO:
        project = await self.project_repository.find_by_id(request.id)
        if not project:
            raise EntityNotFoundError("Project", request.id)

        changes = request.changes()
        if changes.get("currency"):
            changes["currency"] = changes["currency"].upper()

        project.update_info(changes)

        saved_project = await self.project_repository.save(project)
        return ProjectResponseDTO.from_domain(saved_project)


class DeleteProjectUseCase(DeleteUseCase[int, bool]):
    """Use case for deleting a project that no longer owns tasks."""

    def __init__(self, project_repository: ProjectRepository, task_repository: TaskRepository):
        super().__init__()
        self.project_repository = project_repository
        self.task_repository = task_repository

    async def _execute_command_logic(self, project_id: int) -> bool:
        if not await self.project_repository.exists(project_id):
            raise EntityNotFoundError("Project", project_id)

        task_count = await self.task_repository.count_by_project(project_id)
        if task_count:
            raise BusinessRuleViolation(
                f"Cannot delete project with {task_count} task(s); delete or move them first"
            )

        return await self.project_repository.delete(project_id)
