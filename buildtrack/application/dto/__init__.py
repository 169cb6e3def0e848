"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    ListRequestDTO,
    ListResponseDTO,
    PaginationDTO,
    HealthCheckResponseDTO,
    SortOrder,
    UTCDateTime,
    to_naive_utc,
    to_domain_dict,
)
from .task_dto import (
    CreateTaskRequestDTO,
    UpdateTaskRequestDTO,
    UpdateTaskStatusRequestDTO,
    AddCommentRequestDTO,
    ReportIssueRequestDTO,
    UpdateChecklistItemRequestDTO,
    ListTasksRequestDTO,
    TaskAnalyticsRequestDTO,
    TaskResponseDTO,
    TaskListResponseDTO,
    TaskAnalyticsResponseDTO,
    CommentResponseDTO,
    IssueResponseDTO,
    ChecklistItemDTO,
)
from .project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    ListProjectsRequestDTO,
    ProjectResponseDTO,
    ProjectListResponseDTO,
)
from .staff_dto import (
    CreateStaffRequestDTO,
    UpdateStaffRequestDTO,
    ListStaffRequestDTO,
    StaffResponseDTO,
    StaffListResponseDTO,
    AssigneeOptionDTO,
)

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "ListRequestDTO",
    "ListResponseDTO",
    "PaginationDTO",
    "HealthCheckResponseDTO",
    "SortOrder",
    "UTCDateTime",
    "to_naive_utc",
    "to_domain_dict",
    # Task DTOs
    "CreateTaskRequestDTO",
    "UpdateTaskRequestDTO",
    "UpdateTaskStatusRequestDTO",
    "AddCommentRequestDTO",
    "ReportIssueRequestDTO",
    "UpdateChecklistItemRequestDTO",
    "ListTasksRequestDTO",
    "TaskAnalyticsRequestDTO",
    "TaskResponseDTO",
    "TaskListResponseDTO",
    "TaskAnalyticsResponseDTO",
    "CommentResponseDTO",
    "IssueResponseDTO",
    "ChecklistItemDTO",
    # Project DTOs
    "CreateProjectRequestDTO",
    "UpdateProjectRequestDTO",
    "ListProjectsRequestDTO",
    "ProjectResponseDTO",
    "ProjectListResponseDTO",
    # Staff DTOs
    "CreateStaffRequestDTO",
    "UpdateStaffRequestDTO",
    "ListStaffRequestDTO",
    "StaffResponseDTO",
    "StaffListResponseDTO",
    "AssigneeOptionDTO",
]
