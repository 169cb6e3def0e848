"""
Application layer use cases.
Business logic for construction project and task management.
"""

from .base_use_case import (
    UseCaseResult,
    BaseUseCase,
    QueryUseCase,
    CommandUseCase,
    PaginatedQueryUseCase,
    CreateUseCase,
    UpdateUseCase,
    DeleteUseCase,
    GetByIdUseCase,
    ListUseCase,
    AuthorizedUseCase,
)
from .task_use_cases import (
    CreateTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
    DeleteTaskUseCase,
    UpdateTaskStatusUseCase,
    AddTaskCommentUseCase,
    ReportTaskIssueUseCase,
    UpdateChecklistItemUseCase,
    GetTaskAnalyticsUseCase,
)
from .project_use_cases import (
    CreateProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    UpdateProjectUseCase,
    DeleteProjectUseCase,
)
from .staff_use_cases import (
    CreateStaffUseCase,
    GetStaffUseCase,
    ListStaffUseCase,
    ListAssigneeOptionsUseCase,
    UpdateStaffUseCase,
    DeleteStaffUseCase,
)

__all__ = [
    # Base Use Cases
    "UseCaseResult",
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "PaginatedQueryUseCase",
    "CreateUseCase",
    "UpdateUseCase",
    "DeleteUseCase",
    "GetByIdUseCase",
    "ListUseCase",
    "AuthorizedUseCase",
    # Task Use Cases
    "CreateTaskUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "UpdateTaskUseCase",
    "DeleteTaskUseCase",
    "UpdateTaskStatusUseCase",
    "AddTaskCommentUseCase",
    "ReportTaskIssueUseCase",
    "UpdateChecklistItemUseCase",
    "GetTaskAnalyticsUseCase",
    # Project Use Cases
    "CreateProjectUseCase",
    "GetProjectUseCase",
    "ListProjectsUseCase",
    "UpdateProjectUseCase",
    "DeleteProjectUseCase",
    # Staff Use Cases
    "CreateStaffUseCase",
    "GetStaffUseCase",
    "ListStaffUseCase",
    "ListAssigneeOptionsUseCase",
    "UpdateStaffUseCase",
    "DeleteStaffUseCase",
]
