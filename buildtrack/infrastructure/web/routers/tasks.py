"""
Task management router.
Handles task CRUD, lifecycle, collaboration and analytics endpoints.
"""

from datetime import datetime
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, status, Query

from buildtrack.config import settings
from buildtrack.infrastructure.auth import get_current_user_id
from buildtrack.application.use_cases.task_use_cases import (
    CreateTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
    DeleteTaskUseCase,
    UpdateTaskStatusUseCase,
    AddTaskCommentUseCase,
    ReportTaskIssueUseCase,
    UpdateChecklistItemUseCase,
    GetTaskAnalyticsUseCase
)
from buildtrack.application.dto.base_dto import BlankAsNone, SortOrder
from buildtrack.application.dto.task_dto import (
    CreateTaskRequestDTO,
    UpdateTaskRequestDTO,
    UpdateTaskStatusRequestDTO,
    AddCommentRequestDTO,
    ReportIssueRequestDTO,
    UpdateChecklistItemRequestDTO,
    ListTasksRequestDTO,
    TaskAnalyticsRequestDTO
)
from buildtrack.domain.models.task import TaskStatus, TaskPriority, TaskCategory
from buildtrack.domain.services.assignment_validator import AssignmentValidator
from buildtrack.infrastructure.db.database import get_db
from buildtrack.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from buildtrack.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from buildtrack.infrastructure.repositories.staff_repository import SQLAlchemyStaffRepository
from buildtrack.infrastructure.web.results import unwrap


router = APIRouter()


def get_task_repository(session=Depends(get_db)):
    """Dependency to get task repository."""
    return SQLAlchemyTaskRepository(session)


def get_assignment_validator(session=Depends(get_db)):
    """Dependency to get the validator for task references."""
    return AssignmentValidator(
        SQLAlchemyProjectRepository(session),
        SQLAlchemyStaffRepository(session),
        SQLAlchemyTaskRepository(session)
    )


TaskRepositoryDep = Annotated[SQLAlchemyTaskRepository, Depends(get_task_repository)]
UserIdDep = Annotated[str, Depends(get_current_user_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    request: CreateTaskRequestDTO,
    user_id: UserIdDep,
    repository: TaskRepositoryDep,
    validator: Annotated[AssignmentValidator, Depends(get_assignment_validator)]
):
    """
    Create a new task within a project.

    - **name**, **description**, **project**, **startDate**, **endDate**,
      **category**, **priority** are required
    - **assignees**: list of `{user, role}`; every user must be a staff member
    - **dependencies**: list of `{task, type}` referencing existing tasks
    """
    use_case = CreateTaskUseCase(repository, validator)
    use_case.set_current_user(user_id)
    task = unwrap(await use_case.execute(request))
    return {"message": "Task created successfully", "task": task.to_response()}


@router.get("")
async def list_tasks(
    user_id: UserIdDep,
    repository: TaskRepositoryDep,
    project: Annotated[Optional[int], BlankAsNone, Query(description="Filter by project ID")] = None,
    assignee: Annotated[Optional[int], BlankAsNone, Query(description="Filter by assigned staff ID")] = None,
    status: Annotated[Optional[TaskStatus], BlankAsNone, Query(description="Filter by task status")] = None,
    priority: Annotated[Optional[TaskPriority], BlankAsNone, Query(description="Filter by priority")] = None,
    category: Annotated[Optional[TaskCategory], BlankAsNone, Query(description="Filter by category")] = None,
    start_date: Annotated[Optional[datetime], BlankAsNone, Query(alias="startDate", description="Earliest start date")] = None,
    end_date: Annotated[Optional[datetime], BlankAsNone, Query(alias="endDate", description="Latest start date")] = None,
    search: Annotated[Optional[str], BlankAsNone, Query(max_length=255, description="Search name and description")] = None,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.default_page_size, ge=1, description="Items per page"),
    sort_by: str = Query("createdAt", alias="sortBy", description="Field to sort by"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder", description="Sort order (asc/desc)")
):
    """
    List tasks with filtering, sorting and pagination.
    """
    request = ListTasksRequestDTO(
        project_id=project,
        assignee_id=assignee,
        status=status,
        priority=priority,
        category=category,
        start_date=start_date,
        end_date=end_date,
        search=search,
        page=page,
        page_size=limit,
        sort_by=sort_by,
        sort_order=sort_order
    )
    use_case = ListTasksUseCase(repository, settings.default_page_size, settings.max_page_size)
    return unwrap(await use_case.execute(request)).to_response()


@router.get("/analytics")
async def get_task_analytics(
    user_id: UserIdDep,
    repository: TaskRepositoryDep,
    project: Annotated[Optional[int], BlankAsNone, Query(description="Restrict to a project")] = None,
    start_date: Annotated[Optional[datetime], BlankAsNone, Query(alias="startDate", description="Tasks created on or after")] = None,
    end_date: Annotated[Optional[datetime], BlankAsNone, Query(alias="endDate", description="Tasks created on or before")] = None
):
    """
    Status counts, completion rate, overdue count and average completion time in minutes.
    """
    request = TaskAnalyticsRequestDTO(
        project_id=project,
        start_date=start_date,
        end_date=end_date
    )
    use_case = GetTaskAnalyticsUseCase(repository)
    return unwrap(await use_case.execute(request)).to_response()


@router.get("/{task_id}")
async def get_task(
    task_id: int,
    user_id: UserIdDep,
    repository: TaskRepositoryDep
):
    """Get a task by ID."""
    use_case = GetTaskUseCase(repository)
    task = unwrap(await use_case.execute(task_id))
    return {"task": task.to_response()}


@router.put("/{task_id}")
async def update_task(
    task_id: int,
    request: UpdateTaskRequestDTO,
    user_id: UserIdDep,
    repository: TaskRepositoryDep,
    validator: Annotated[AssignmentValidator, Depends(get_assignment_validator)]
):
    """
    Update task fields. Only fields present in the body change; the project
    cannot be changed. A **status** is applied after the other fields.
    """
    request.id = task_id
    use_case = UpdateTaskUseCase(repository, validator)
    use_case.set_current_user(user_id)
    task = unwrap(await use_case.execute(request))
    return {"message": "Task updated successfully", "task": task.to_response()}


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    user_id: UserIdDep,
    repository: TaskRepositoryDep
):
    """Delete a task."""
    use_case = DeleteTaskUseCase(repository)
    unwrap(await use_case.execute(task_id))
    return {"message": "Task deleted successfully"}


@router.patch("/{task_id}/status")
async def update_task_status(
    task_id: int,
    user_id: UserIdDep,
    repository: TaskRepositoryDep,
    request: Optional[UpdateTaskStatusRequestDTO] = None
):
    """Move a task to another status, recording who changed it and why."""
    request = request or UpdateTaskStatusRequestDTO()
    request.id = task_id
    use_case = UpdateTaskStatusUseCase(repository)
    use_case.set_current_user(user_id)
    task = unwrap(await use_case.execute(request))
    return {"message": "Task status updated successfully", "task": task.to_response()}


@router.post("/{task_id}/comments")
async def add_task_comment(
    task_id: int,
    request: AddCommentRequestDTO,
    user_id: UserIdDep,
    repository: TaskRepositoryDep
):
    """Add a comment to a task."""
    request.id = task_id
    use_case = AddTaskCommentUseCase(repository)
    use_case.set_current_user(user_id)
    comment = unwrap(await use_case.execute(request))
    return {"message": "Comment added successfully", "comment": comment.to_response()}


@router.post("/{task_id}/issues")
async def report_task_issue(
    task_id: int,
    request: ReportIssueRequestDTO,
    user_id: UserIdDep,
    repository: TaskRepositoryDep
):
    """Report an issue or blocker on a task."""
    request.id = task_id
    use_case = ReportTaskIssueUseCase(repository)
    use_case.set_current_user(user_id)
    issue = unwrap(await use_case.execute(request))
    return {"message": "Issue reported successfully", "issue": issue.to_response()}


@router.patch("/{task_id}/checklist/{item_id}")
async def update_checklist_item(
    task_id: int,
    item_id: str,
    request: UpdateChecklistItemRequestDTO,
    user_id: UserIdDep,
    repository: TaskRepositoryDep
):
    """Mark a checklist item as done or not done."""
    request.id = task_id
    request.item_id = item_id
    use_case = UpdateChecklistItemUseCase(repository)
    use_case.set_current_user(user_id)
    item = unwrap(await use_case.execute(request))
    return {"message": "Checklist item updated successfully", "checklistItem": item.to_response()}
