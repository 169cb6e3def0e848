"""
Task DTOs for the application layer.
Data Transfer Objects for task-related operations.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import Field, ValidationInfo, field_validator, model_validator

from buildtrack.domain.models.base import ValidationError
from buildtrack.domain.models.task import (
    Task,
    TaskStatus,
    TaskPriority,
    TaskCategory,
    AssigneeRole,
    DependencyType,
    IssueSeverity,
    IssueStatus,
    DocumentType,
    TaskAssignee,
    TaskDependency,
    ChecklistItem,
    CommentAttachment,
    TaskComment,
    TaskIssue,
    TaskDocument,
    StatusChange,
    NotificationRecord,
)
from buildtrack.domain.models.value_objects import Coordinates, Quantity, PauseInterval
from buildtrack.domain.services.task_analytics_service import TaskAnalytics

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ListRequestDTO, ListResponseDTO, SortOrder, UTCDateTime


# Nested DTOs

class CoordinatesDTO(BaseDTO):
    """Latitude/longitude pair."""

    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)

    def to_domain(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)

    @classmethod
    def from_domain(cls, coordinates: Optional[Coordinates]) -> Optional["CoordinatesDTO"]:
        if coordinates is None:
            return None
        return cls(lat=coordinates.lat, lng=coordinates.lng)


class QuantityDTO(BaseDTO):
    """Measured amount of work."""

    value: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = Field(default=None, max_length=50)

    def to_domain(self) -> Quantity:
        return Quantity(value=self.value, unit=self.unit)

    @classmethod
    def from_domain(cls, quantity: Optional[Quantity]) -> Optional["QuantityDTO"]:
        if quantity is None:
            return None
        return cls(value=quantity.value, unit=quantity.unit)


class PauseIntervalDTO(BaseDTO):
    """Period during which work was paused."""

    pause_start: Optional[UTCDateTime] = None
    pause_end: Optional[UTCDateTime] = None
    reason: Optional[str] = None

    def to_domain(self) -> PauseInterval:
        return PauseInterval(pause_start=self.pause_start, pause_end=self.pause_end, reason=self.reason)

    @classmethod
    def from_domain(cls, interval: PauseInterval) -> "PauseIntervalDTO":
        return cls(pause_start=interval.pause_start, pause_end=interval.pause_end, reason=interval.reason)


class AssigneeRequestDTO(RequestDTO):
    """DTO for a task assignee in requests."""

    staff_id: int = Field(alias="user", description="Staff ID")
    role: AssigneeRole = Field(default=AssigneeRole.MEMBER, description="Role on the task")

    def to_domain(self) -> TaskAssignee:
        return TaskAssignee(staff_id=self.staff_id, role=self.role)


class AssigneeResponseDTO(BaseDTO):
    staff_id: int = Field(alias="user")
    role: AssigneeRole
    assigned_at: datetime

    @classmethod
    def from_domain(cls, assignee: TaskAssignee) -> "AssigneeResponseDTO":
        return cls(staff_id=assignee.staff_id, role=assignee.role, assigned_at=assignee.assigned_at)


class DependencyDTO(BaseDTO):
    """Reference to a prerequisite task."""

    task_id: int = Field(alias="task", description="Task ID")
    type: DependencyType = Field(default=DependencyType.FINISH_TO_START)

    def to_domain(self) -> TaskDependency:
        return TaskDependency(task_id=self.task_id, type=self.type)

    @classmethod
    def from_domain(cls, dependency: TaskDependency) -> "DependencyDTO":
        return cls(task_id=dependency.task_id, type=dependency.type)


class ChecklistItemDTO(BaseDTO):
    """Checklist entry; an existing id is kept when the list is replaced."""

    id: Optional[str] = None
    item: str = Field(min_length=1, max_length=500)
    completed: bool = False
    completed_by: Optional[str] = None
    completed_at: Optional[UTCDateTime] = None
    notes: Optional[str] = None

    def to_domain(self) -> ChecklistItem:
        item = ChecklistItem(
            item=self.item,
            completed=self.completed,
            completed_by=self.completed_by,
            completed_at=self.completed_at,
            notes=self.notes,
        )
        if self.id:
            item.id = self.id
        return item

    @classmethod
    def from_domain(cls, item: ChecklistItem) -> "ChecklistItemDTO":
        return cls(
            id=item.id,
            item=item.item,
            completed=item.completed,
            completed_by=item.completed_by,
            completed_at=item.completed_at,
            notes=item.notes,
        )


class DocumentDTO(BaseDTO):
    """Drawing, permit or other file reference."""

    id: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=255)
    url: Optional[str] = Field(default=None, max_length=1000)
    type: Optional[DocumentType] = None
    uploaded_by: Optional[str] = None
    uploaded_at: Optional[UTCDateTime] = None

    def to_domain(self) -> TaskDocument:
        document = TaskDocument(name=self.name, url=self.url, type=self.type, uploaded_by=self.uploaded_by)
        if self.uploaded_at:
            document.uploaded_at = self.uploaded_at
        if self.id:
            document.id = self.id
        return document

    @classmethod
    def from_domain(cls, document: TaskDocument) -> "DocumentDTO":
        return cls(
            id=document.id,
            name=document.name,
            url=document.url,
            type=document.type,
            uploaded_by=document.uploaded_by,
            uploaded_at=document.uploaded_at,
        )


class AttachmentDTO(BaseDTO):
    """File attached to a comment."""

    file_name: Optional[str] = Field(default=None, max_length=255)
    file_url: Optional[str] = Field(default=None, max_length=1000)
    file_type: Optional[str] = Field(default=None, max_length=100)
    uploaded_at: Optional[datetime] = None

    def to_domain(self) -> CommentAttachment:
        return CommentAttachment(file_name=self.file_name, file_url=self.file_url, file_type=self.file_type)

    @classmethod
    def from_domain(cls, attachment: CommentAttachment) -> "AttachmentDTO":
        return cls(
            file_name=attachment.file_name,
            file_url=attachment.file_url,
            file_type=attachment.file_type,
            uploaded_at=attachment.uploaded_at,
        )


class CommentResponseDTO(BaseDTO):
    id: str
    user: str
    content: str
    created_at: datetime
    attachments: List[AttachmentDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, comment: TaskComment) -> "CommentResponseDTO":
        return cls(
            id=comment.id,
            user=comment.user,
            content=comment.content,
            created_at=comment.created_at,
            attachments=[AttachmentDTO.from_domain(a) for a in comment.attachments],
        )


class IssueResponseDTO(BaseDTO):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    severity: IssueSeverity
    status: IssueStatus
    reported_by: Optional[str] = None
    assigned_to: Optional[str] = None
    reported_at: datetime
    resolved_at: Optional[datetime] = None
    resolution: Optional[str] = None

    @classmethod
    def from_domain(cls, issue: TaskIssue) -> "IssueResponseDTO":
        return cls(
            id=issue.id,
            title=issue.title,
            description=issue.description,
            severity=issue.severity,
            status=issue.status,
            reported_by=issue.reported_by,
            assigned_to=issue.assigned_to,
            reported_at=issue.reported_at,
            resolved_at=issue.resolved_at,
            resolution=issue.resolution,
        )


class StatusChangeResponseDTO(BaseDTO):
    status: TaskStatus
    changed_by: str
    changed_at: datetime
    reason: Optional[str] = None

    @classmethod
    def from_domain(cls, change: StatusChange) -> "StatusChangeResponseDTO":
        return cls(status=change.status, changed_by=change.changed_by, changed_at=change.changed_at, reason=change.reason)


class NotificationResponseDTO(BaseDTO):
    type: str
    sent_to: List[str] = Field(default_factory=list)
    sent_at: datetime

    @classmethod
    def from_domain(cls, record: NotificationRecord) -> "NotificationResponseDTO":
        return cls(type=record.type, sent_to=list(record.sent_to), sent_at=record.sent_at)


# Request DTOs

# Fields that may not be cleared with an explicit null
NON_NULLABLE_FIELDS = frozenset({
    "name", "description", "category", "priority", "start_date", "end_date", "percentage_complete",
})
LIST_FIELDS = frozenset({"paused_time", "assignees", "dependencies", "checklist", "documents"})


class TaskFieldsMixin(RequestDTO):
    """Optional task fields shared by creation and update requests."""

    location: Optional[str] = Field(default=None, max_length=500)
    coordinates: Optional[CoordinatesDTO] = None
    milestone: Optional[str] = Field(default=None, max_length=255)
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    actual_start_time: Optional[UTCDateTime] = None
    actual_end_time: Optional[UTCDateTime] = None
    paused_time: Optional[List[PauseIntervalDTO]] = None
    assignees: Optional[List[AssigneeRequestDTO]] = None
    dependencies: Optional[List[DependencyDTO]] = None
    percentage_complete: Optional[float] = Field(default=None, ge=0, le=100)
    quantity_planned: Optional[QuantityDTO] = None
    quantity_completed: Optional[QuantityDTO] = None
    checklist: Optional[List[ChecklistItemDTO]] = None
    documents: Optional[List[DocumentDTO]] = None

    def to_domain_changes(self, exclude: frozenset = frozenset()) -> Dict[str, Any]:
        """Convert the fields the client sent into domain values keyed by attribute name."""
        changes: Dict[str, Any] = {}
        for name in self.model_fields_set - exclude:
            value = getattr(self, name)
            if value is None:
                if name in NON_NULLABLE_FIELDS:
                    raise ValidationError(f"{name} cannot be empty", name)
                changes[name] = [] if name in LIST_FIELDS else None
            elif isinstance(value, list):
                changes[name] = [item.to_domain() for item in value]
            elif isinstance(value, BaseDTO):
                changes[name] = value.to_domain()
            else:
                changes[name] = value
        return changes


class CreateTaskRequestDTO(TaskFieldsMixin):
    """DTO for task creation requests. New tasks always start as not_started."""

    name: str = Field(max_length=255, description="Task name")
    description: str = Field(description="Task description")
    project_id: int = Field(alias="project", description="Project ID")
    start_date: UTCDateTime = Field(description="Planned start")
    end_date: UTCDateTime = Field(description="Planned end")
    category: TaskCategory = Field(description="Kind of work")
    priority: TaskPriority = Field(description="Task priority")

    @field_validator("name", "description")
    @classmethod
    def require_text(cls, value: str, info: ValidationInfo) -> str:
        # Blank counts as missing
        if not value.strip():
            raise ValueError(f"Missing required field: {info.field_name}")
        return value

    def task_details(self) -> Dict[str, Any]:
        """Optional and descriptive fields, ready for Task.create."""
        return self.to_domain_changes(
            exclude=frozenset({"name", "project_id", "start_date", "end_date"})
        )


class UpdateTaskRequestDTO(TaskFieldsMixin):
    """
    DTO for task update requests.
    Only fields present in the body are applied. A status here is applied
    after the field changes, through the same lifecycle as the status route.
    """

    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    reason: Optional[str] = Field(default=None, max_length=1000, description="Reason recorded with a status change")

    @model_validator(mode="before")
    @classmethod
    def reject_project_change(cls, data: Any) -> Any:
        if isinstance(data, dict) and ("project" in data or "project_id" in data):
            raise ValueError("Project cannot be changed")
        return data

    def field_changes(self) -> Dict[str, Any]:
        return self.to_domain_changes(exclude=frozenset({"id", "status", "reason", "assignees"}))

    @property
    def replaces_assignees(self) -> bool:
        return "assignees" in self.model_fields_set


class UpdateTaskStatusRequestDTO(RequestDTO):
    """DTO for task status updates."""

    id: Optional[int] = Field(default=None, exclude=True)
    status: Optional[TaskStatus] = Field(default=None, description="New status")
    reason: Optional[str] = Field(default=None, max_length=1000, description="Reason for the change")


class AddCommentRequestDTO(RequestDTO):
    """DTO for adding a comment to a task."""

    id: Optional[int] = Field(default=None, exclude=True)
    content: str = Field(min_length=1, max_length=5000, description="Comment content")
    attachments: List[AttachmentDTO] = Field(default_factory=list)


class ReportIssueRequestDTO(RequestDTO):
    """DTO for reporting an issue against a task."""

    id: Optional[int] = Field(default=None, exclude=True)
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    severity: IssueSeverity = Field(default=IssueSeverity.MEDIUM)
    assigned_to: Optional[str] = None


class UpdateChecklistItemRequestDTO(RequestDTO):
    """DTO for ticking a checklist item."""

    id: Optional[int] = Field(default=None, exclude=True)
    item_id: Optional[str] = Field(default=None, exclude=True)
    completed: bool = False
    notes: Optional[str] = Field(default=None, max_length=2000)


class ListTasksRequestDTO(ListRequestDTO):
    """DTO for task list requests."""

    project_id: Optional[int] = None
    assignee_id: Optional[int] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[TaskCategory] = None
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None
    sort_by: str = Field(default="createdAt", description="Sort field")
    sort_order: SortOrder = Field(default=SortOrder.DESC, description="Sort order")


class TaskAnalyticsRequestDTO(RequestDTO):
    """DTO for analytics requests; dates bound the task creation time."""

    project_id: Optional[int] = None
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None


# Response DTOs

class TaskResponseDTO(ResponseDTO):
    """DTO for task responses."""

    project_id: int = Field(alias="project")
    name: str
    description: Optional[str] = None
    category: TaskCategory
    priority: TaskPriority
    location: Optional[str] = None
    coordinates: Optional[CoordinatesDTO] = None
    milestone: Optional[str] = None

    start_date: datetime
    end_date: datetime
    estimated_hours: Optional[float] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    paused_time: List[PauseIntervalDTO] = Field(default_factory=list)

    assignees: List[AssigneeResponseDTO] = Field(default_factory=list)
    dependencies: List[DependencyDTO] = Field(default_factory=list)

    status: TaskStatus
    percentage_complete: float
    quantity_planned: Optional[QuantityDTO] = None
    quantity_completed: Optional[QuantityDTO] = None
    completed_date: Optional[datetime] = None

    checklist: List[ChecklistItemDTO] = Field(default_factory=list)
    comments: List[CommentResponseDTO] = Field(default_factory=list)
    issues: List[IssueResponseDTO] = Field(default_factory=list)
    documents: List[DocumentDTO] = Field(default_factory=list)
    status_history: List[StatusChangeResponseDTO] = Field(default_factory=list)
    notifications_sent: List[NotificationResponseDTO] = Field(default_factory=list)

    created_by: str
    is_overdue: bool = False
    checklist_progress: float = 0.0

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponseDTO":
        """Build the response representation of a task."""
        return cls(
            id=task.id,
            project_id=task.project_id,
            name=task.name,
            description=task.description,
            category=task.category,
            priority=task.priority,
            location=task.location,
            coordinates=CoordinatesDTO.from_domain(task.coordinates),
            milestone=task.milestone,
            start_date=task.start_date,
            end_date=task.end_date,
            estimated_hours=task.estimated_hours,
            actual_start_time=task.actual_start_time,
            actual_end_time=task.actual_end_time,
            paused_time=[PauseIntervalDTO.from_domain(p) for p in task.paused_time],
            assignees=[AssigneeResponseDTO.from_domain(a) for a in task.assignees],
            dependencies=[DependencyDTO.from_domain(d) for d in task.dependencies],
            status=task.status,
            percentage_complete=task.percentage_complete,
            quantity_planned=QuantityDTO.from_domain(task.quantity_planned),
            quantity_completed=QuantityDTO.from_domain(task.quantity_completed),
            completed_date=task.completed_date,
            checklist=[ChecklistItemDTO.from_domain(c) for c in task.checklist],
            comments=[CommentResponseDTO.from_domain(c) for c in task.comments],
            issues=[IssueResponseDTO.from_domain(i) for i in task.issues],
            documents=[DocumentDTO.from_domain(d) for d in task.documents],
            status_history=[StatusChangeResponseDTO.from_domain(s) for s in task.status_history],
            notifications_sent=[NotificationResponseDTO.from_domain(n) for n in task.notifications_sent],
            created_by=task.created_by,
            is_overdue=task.is_overdue,
            checklist_progress=task.checklist_progress,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskListResponseDTO(ListResponseDTO):
    """DTO for paginated task lists."""

    tasks: List[TaskResponseDTO]


class TaskAnalyticsResponseDTO(BaseDTO):
    """DTO for task analytics."""

    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    not_started_tasks: int
    on_hold_tasks: int
    cancelled_tasks: int
    overdue_tasks: int
    completion_rate: float
    average_completion_time: int = Field(description="Mean minutes from start date to completion")

    @classmethod
    def from_domain(cls, analytics: TaskAnalytics) -> "TaskAnalyticsResponseDTO":
        return cls(**analytics.to_dict())
