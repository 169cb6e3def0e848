"""
Task use cases for the application layer.
Implements business logic for task operations.
"""

from typing import Optional

from buildtrack.application.use_cases.base_use_case import (
    CreateUseCase, UpdateUseCase, DeleteUseCase, GetByIdUseCase,
    ListUseCase, QueryUseCase, AuthorizedUseCase
)
from buildtrack.application.dto.base_dto import PaginationDTO, SortOrder
from buildtrack.application.dto.task_dto import (
    CreateTaskRequestDTO, UpdateTaskRequestDTO, UpdateTaskStatusRequestDTO,
    AddCommentRequestDTO, ReportIssueRequestDTO, UpdateChecklistItemRequestDTO,
    ListTasksRequestDTO, TaskAnalyticsRequestDTO, TaskResponseDTO,
    TaskListResponseDTO, TaskAnalyticsResponseDTO, CommentResponseDTO,
    IssueResponseDTO, ChecklistItemDTO
)
from buildtrack.domain.events.task_events import TaskCreated
from buildtrack.domain.models.base import EntityNotFoundError, ValidationError
from buildtrack.domain.models.task import Task
from buildtrack.domain.repositories.task_repository import (
    TaskRepository, TaskFilter, TaskSort, TASK_SORT_FIELDS
)
from buildtrack.domain.services.assignment_validator import AssignmentValidator
from buildtrack.domain.services.task_analytics_service import TaskAnalyticsService


async def _get_task_or_raise(task_repository: TaskRepository, task_id: Optional[int]) -> Task:
    task = await task_repository.find_by_id(task_id) if task_id else None
    if not task:
        raise EntityNotFoundError("Task", task_id)
    return task


class CreateTaskUseCase(AuthorizedUseCase, CreateUseCase[CreateTaskRequestDTO, TaskResponseDTO]):
    """Use case for creating a new task."""

    def __init__(
        self,
        task_repository: TaskRepository,
        assignment_validator: AssignmentValidator
    ):
        super().__init__()
        self.task_repository = task_repository
        self.assignment_validator = assignment_validator

    async def _execute_command_logic(self, request: CreateTaskRequestDTO) -> TaskResponseDTO:
        details = request.task_details()

        # Every reference must resolve before anything is written
        await self.assignment_validator.validate(
            request.project_id,
            assignees=details.get("assignees", []),
            dependencies=details.get("dependencies", [])
        )

        task = Task.create(
            project_id=request.project_id,
            name=request.name,
            created_by=self.current_user_id,
            start_date=request.start_date,
            end_date=request.end_date,
            **details
        )

        saved_task = await self.task_repository.save(task)

        self.events.append(TaskCreated(
            task_id=saved_task.id,
            project_id=saved_task.project_id,
            name=saved_task.name,
            created_by=saved_task.created_by
        ))

        return TaskResponseDTO.from_domain(saved_task)


class GetTaskUseCase(GetByIdUseCase[int, TaskResponseDTO]):
    """Use case for getting a task by ID."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _execute_business_logic(self, task_id: int) -> TaskResponseDTO:
        task = await _get_task_or_raise(self.task_repository, task_id)
        return TaskResponseDTO.from_domain(task)


class ListTasksUseCase(ListUseCase[ListTasksRequestDTO, TaskListResponseDTO]):
    """Use case for listing tasks with filters, sorting and pagination."""

    def __init__(
        self,
        task_repository: TaskRepository,
        default_page_size: int = 10,
        max_page_size: int = 100
    ):
        super().__init__(default_page_size, max_page_size)
        self.task_repository = task_repository

    async def _validate_request(self, request: ListTasksRequestDTO) -> None:
        await super()._validate_request(request)

        if request.sort_by not in TASK_SORT_FIELDS:
            raise ValidationError("Invalid value for sortBy", "sortBy", {"allowed": sorted(TASK_SORT_FIELDS)})

    async def _execute_business_logic(self, request: ListTasksRequestDTO) -> TaskListResponseDTO:
        task_filter = TaskFilter(
            project_id=request.project_id,
            assignee_id=request.assignee_id,
            status=request.status,
            priority=request.priority,
            category=request.category,
            start_from=request.start_date,
            start_to=request.end_date,
            search=request.search.strip() if request.search else None
        )
        sort = TaskSort(field=request.sort_by, descending=request.sort_order == SortOrder.DESC)

        page = await self.task_repository.find_page(
            task_filter,
            sort,
            page=request.page,
            page_size=self._page_size(request.page_size)
        )

        return TaskListResponseDTO(
            tasks=[TaskResponseDTO.from_domain(task) for task in page.items],
            pagination=PaginationDTO.from_page(page)
        )


class UpdateTaskUseCase(AuthorizedUseCase, UpdateUseCase[UpdateTaskRequestDTO, TaskResponseDTO]):
    """
    Use case for updating task information.
    Field changes are applied first; a status in the same request then goes
    through the task lifecycle so history and completion stay consistent.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        assignment_validator: AssignmentValidator
    ):
        super().__init__()
        self.task_repository = task_repository
        self.assignment_validator = assignment_validator

    async def _execute_command_logic(self, request: UpdateTaskRequestDTO) -> TaskResponseDTO:
        task = await _get_task_or_raise(self.task_repository, request.id)

        changes = request.field_changes()

        if "dependencies" in changes:
            await self.assignment_validator.validate_dependencies(changes["dependencies"], task.id)

        if request.replaces_assignees:
            assignees = [assignee.to_domain() for assignee in request.assignees or []]
            await self.assignment_validator.validate_assignees(assignees)
        else:
            assignees = None

        if changes:
            task.update_details(changes)

        if assignees is not None:
            task.replace_assignees(assignees)

        if request.status is not None:
            task.change_status(request.status, self.current_user_id, request.reason)

        saved_task = await self.task_repository.save(task)
        self._collect_events(saved_task)

        return TaskResponseDTO.from_domain(saved_task)


class DeleteTaskUseCase(DeleteUseCase[int, bool]):
    """Use case for deleting a task. Tasks depending on it are left untouched."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _execute_command_logic(self, task_id: int) -> bool:
        deleted = await self.task_repository.delete(task_id)
        if not deleted:
            raise EntityNotFoundError("Task", task_id)
        return True


class UpdateTaskStatusUseCase(AuthorizedUseCase, UpdateUseCase[UpdateTaskStatusRequestDTO, TaskResponseDTO]):
    """Use case for updating task status."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _validate_request(self, request: UpdateTaskStatusRequestDTO) -> None:
        await super()._validate_request(request)

        if request.status is None:
            raise ValidationError("Status is required", "status")

    async def _execute_command_logic(self, request: UpdateTaskStatusRequestDTO) -> TaskResponseDTO:
        task = await _get_task_or_raise(self.task_repository, request.id)

        if task.change_status(request.status, self.current_user_id, request.reason):
            task = await self.task_repository.save(task)
            self._collect_events(task)

        return TaskResponseDTO.from_domain(task)


class AddTaskCommentUseCase(AuthorizedUseCase, UpdateUseCase[AddCommentRequestDTO, CommentResponseDTO]):
    """Use case for commenting on a task."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _execute_command_logic(self, request: AddCommentRequestDTO) -> CommentResponseDTO:
        task = await _get_task_or_raise(self.task_repository, request.id)

        comment = task.add_comment(
            user=self.current_user_id,
            content=request.content,
            attachments=[attachment.to_domain() for attachment in request.attachments]
        )

        await self.task_repository.save(task)
        return CommentResponseDTO.from_domain(comment)


class ReportTaskIssueUseCase(AuthorizedUseCase, UpdateUseCase[ReportIssueRequestDTO, IssueResponseDTO]):
    """Use case for reporting an issue on a task."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _execute_command_logic(self, request: ReportIssueRequestDTO) -> IssueResponseDTO:
        task = await _get_task_or_raise(self.task_repository, request.id)

        issue = task.report_issue(
            reported_by=self.current_user_id,
            title=request.title,
            description=request.description,
            severity=request.severity,
            assigned_to=request.assigned_to
        )

        saved_task = await self.task_repository.save(task)
        self._collect_events(saved_task)

        return IssueResponseDTO.from_domain(issue)


class UpdateChecklistItemUseCase(AuthorizedUseCase, UpdateUseCase[UpdateChecklistItemRequestDTO, ChecklistItemDTO]):
    """Use case for ticking or unticking a checklist item."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def _execute_command_logic(self, request: UpdateChecklistItemRequestDTO) -> ChecklistItemDTO:
        task = await _get_task_or_raise(self.task_repository, request.id)

        item = task.update_checklist_item(
            request.item_id,
            completed=request.completed,
            notes=request.notes,
            actor=self.current_user_id
        )

        await self.task_repository.save(task)
        return ChecklistItemDTO.from_domain(item)


class GetTaskAnalyticsUseCase(QueryUseCase[TaskAnalyticsRequestDTO, TaskAnalyticsResponseDTO]):
    """Use case for task analytics over a project and creation window."""

    def __init__(
        self,
        task_repository: TaskRepository,
        analytics_service: Optional[TaskAnalyticsService] = None
    ):
        super().__init__()
        self.task_repository = task_repository
        self.analytics_service = analytics_service or TaskAnalyticsService()

    async def _execute_business_logic(self, request: TaskAnalyticsRequestDTO) -> TaskAnalyticsResponseDTO:
        tasks = await self.task_repository.find_for_analytics(
            project_id=request.project_id,
            created_from=request.start_date,
            created_to=request.end_date
        )

        analytics = self.analytics_service.calculate(tasks)
        return TaskAnalyticsResponseDTO.from_domain(analytics)
