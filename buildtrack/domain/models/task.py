"""
Task domain model.
Represents a unit of construction work within a project, with its crew,
checklist, collaboration threads and status lifecycle.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Any, FrozenSet, Iterable
from enum import Enum

from buildtrack.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    new_subdocument_id,
)
from buildtrack.domain.models.value_objects import (
    Coordinates,
    Quantity,
    PauseInterval,
    parse_datetime,
    format_datetime,
)
from buildtrack.domain.events.task_events import TaskStatusChanged, TaskCompleted, TaskIssueReported


class TaskStatus(str, Enum):
    """Task progress states."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskCategory(str, Enum):
    """Kind of work a task represents."""
    CONSTRUCTION = "construction"
    INSPECTION = "inspection"
    PROCUREMENT = "procurement"
    PLANNING = "planning"
    SAFETY = "safety"
    OTHER = "other"


class AssigneeRole(str, Enum):
    """Role of a staff member on a task."""
    LEAD = "lead"
    MEMBER = "member"
    REVIEWER = "reviewer"
    OBSERVER = "observer"


class DependencyType(str, Enum):
    """Scheduling relationship between two tasks."""
    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"


class IssueSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class DocumentType(str, Enum):
    DRAWING = "drawing"
    PERMIT = "permit"
    INSTRUCTION = "instruction"
    PHOTO = "photo"
    VIDEO = "video"
    OTHER = "other"


# Any status may move to any other status; re-applying the current status is a no-op.
ALLOWED_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    status: frozenset(TaskStatus) - {status} for status in TaskStatus
}

# Statuses that never count as overdue in analytics.
CLOSED_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


# Sub-documents

@dataclass
class TaskAssignee:
    """A staff member bound to a task with a role."""

    staff_id: int
    role: AssigneeRole = AssigneeRole.MEMBER
    assigned_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "staff_id": self.staff_id,
            "role": self.role.value,
            "assigned_at": format_datetime(self.assigned_at),
        }


@dataclass
class TaskDependency:
    """Reference to a task this task depends on."""

    task_id: int
    type: DependencyType = DependencyType.FINISH_TO_START

    def to_dict(self) -> Dict[str, Any]:
        return {"task_id": self.task_id, "type": self.type.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskDependency":
        return cls(
            task_id=data["task_id"],
            type=DependencyType(data.get("type") or DependencyType.FINISH_TO_START.value),
        )


@dataclass
class ChecklistItem:
    """A completion flag for a sub-step of the task."""

    item: str
    completed: bool = False
    completed_by: Optional[str] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    id: str = field(default_factory=new_subdocument_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "item": self.item,
            "completed": self.completed,
            "completed_by": self.completed_by,
            "completed_at": format_datetime(self.completed_at),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChecklistItem":
        return cls(
            id=data.get("id") or new_subdocument_id(),
            item=data["item"],
            completed=bool(data.get("completed", False)),
            completed_by=data.get("completed_by"),
            completed_at=parse_datetime(data.get("completed_at")),
            notes=data.get("notes"),
        )


@dataclass
class CommentAttachment:
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    uploaded_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "file_url": self.file_url,
            "file_type": self.file_type,
            "uploaded_at": format_datetime(self.uploaded_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommentAttachment":
        return cls(
            file_name=data.get("file_name"),
            file_url=data.get("file_url"),
            file_type=data.get("file_type"),
            uploaded_at=parse_datetime(data.get("uploaded_at")) or datetime.utcnow(),
        )


@dataclass
class TaskComment:
    """Task comment."""

    user: str
    content: str
    created_at: datetime = field(default_factory=datetime.utcnow)
    attachments: List[CommentAttachment] = field(default_factory=list)
    id: str = field(default_factory=new_subdocument_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user": self.user,
            "content": self.content,
            "created_at": format_datetime(self.created_at),
            "attachments": [attachment.to_dict() for attachment in self.attachments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskComment":
        return cls(
            id=data.get("id") or new_subdocument_id(),
            user=data["user"],
            content=data["content"],
            created_at=parse_datetime(data.get("created_at")) or datetime.utcnow(),
            attachments=[CommentAttachment.from_dict(a) for a in data.get("attachments") or []],
        )


@dataclass
class TaskIssue:
    """An issue or blocker raised against a task."""

    title: Optional[str] = None
    description: Optional[str] = None
    severity: IssueSeverity = IssueSeverity.MEDIUM
    status: IssueStatus = IssueStatus.OPEN
    reported_by: Optional[str] = None
    assigned_to: Optional[str] = None
    reported_at: datetime = field(default_factory=datetime.utcnow)
    resolved_at: Optional[datetime] = None
    resolution: Optional[str] = None
    id: str = field(default_factory=new_subdocument_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "status": self.status.value,
            "reported_by": self.reported_by,
            "assigned_to": self.assigned_to,
            "reported_at": format_datetime(self.reported_at),
            "resolved_at": format_datetime(self.resolved_at),
            "resolution": self.resolution,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskIssue":
        return cls(
            id=data.get("id") or new_subdocument_id(),
            title=data.get("title"),
            description=data.get("description"),
            severity=IssueSeverity(data.get("severity") or IssueSeverity.MEDIUM.value),
            status=IssueStatus(data.get("status") or IssueStatus.OPEN.value),
            reported_by=data.get("reported_by"),
            assigned_to=data.get("assigned_to"),
            reported_at=parse_datetime(data.get("reported_at")) or datetime.utcnow(),
            resolved_at=parse_datetime(data.get("resolved_at")),
            resolution=data.get("resolution"),
        )


@dataclass
class TaskDocument:
    """Drawing, permit or other file attached to the task."""

    name: Optional[str] = None
    url: Optional[str] = None
    type: Optional[DocumentType] = None
    uploaded_by: Optional[str] = None
    uploaded_at: datetime = field(default_factory=datetime.utcnow)
    id: str = field(default_factory=new_subdocument_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "type": self.type.value if self.type else None,
            "uploaded_by": self.uploaded_by,
            "uploaded_at": format_datetime(self.uploaded_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskDocument":
        return cls(
            id=data.get("id") or new_subdocument_id(),
            name=data.get("name"),
            url=data.get("url"),
            type=DocumentType(data["type"]) if data.get("type") else None,
            uploaded_by=data.get("uploaded_by"),
            uploaded_at=parse_datetime(data.get("uploaded_at")) or datetime.utcnow(),
        )


@dataclass
class StatusChange:
    """Audit trail entry for a status transition."""

    status: TaskStatus
    changed_by: str
    changed_at: datetime = field(default_factory=datetime.utcnow)
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "changed_by": self.changed_by,
            "changed_at": format_datetime(self.changed_at),
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatusChange":
        return cls(
            status=TaskStatus(data["status"]),
            changed_by=data["changed_by"],
            changed_at=parse_datetime(data.get("changed_at")) or datetime.utcnow(),
            reason=data.get("reason"),
        )


@dataclass
class NotificationRecord:
    type: str
    sent_to: List[str] = field(default_factory=list)
    sent_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "sent_to": list(self.sent_to),
            "sent_at": format_datetime(self.sent_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationRecord":
        return cls(
            type=data["type"],
            sent_to=list(data.get("sent_to") or []),
            sent_at=parse_datetime(data.get("sent_at")) or datetime.utcnow(),
        )


# Fields a caller may change through a general update.
EDITABLE_FIELDS = frozenset({
    "name", "description", "category", "priority", "location", "coordinates",
    "milestone", "start_date", "end_date", "estimated_hours", "actual_start_time",
    "actual_end_time", "paused_time", "percentage_complete", "quantity_planned",
    "quantity_completed", "dependencies", "checklist", "documents",
})


@dataclass
class Task(BaseEntity):
    """
    Task entity.
    Belongs to exactly one project and owns its sub-collections. Status
    changes go through change_status so the completion timestamp and the
    audit trail stay consistent.
    """

    # Required fields
    project_id: int = 0
    name: str = ""
    created_by: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    # Description
    description: Optional[str] = None
    category: TaskCategory = TaskCategory.CONSTRUCTION
    priority: TaskPriority = TaskPriority.MEDIUM
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    milestone: Optional[str] = None

    # Scheduling
    estimated_hours: Optional[float] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    paused_time: List[PauseInterval] = field(default_factory=list)

    # Relationships
    assignees: List[TaskAssignee] = field(default_factory=list)
    dependencies: List[TaskDependency] = field(default_factory=list)

    # Progress
    status: TaskStatus = TaskStatus.NOT_STARTED
    percentage_complete: float = 0
    quantity_planned: Optional[Quantity] = None
    quantity_completed: Optional[Quantity] = None
    completed_date: Optional[datetime] = None

    # Owned sub-collections
    checklist: List[ChecklistItem] = field(default_factory=list)
    comments: List[TaskComment] = field(default_factory=list)
    issues: List[TaskIssue] = field(default_factory=list)
    documents: List[TaskDocument] = field(default_factory=list)
    status_history: List[StatusChange] = field(default_factory=list)
    notifications_sent: List[NotificationRecord] = field(default_factory=list)

    def __post_init__(self):
        """Initialize task after creation."""
        super().__post_init__()
        self.validate()

    @classmethod
    def create(
        cls,
        project_id: int,
        name: str,
        created_by: str,
        start_date: datetime,
        end_date: datetime,
        **details: Any
    ) -> "Task":
        """Create a new task. New tasks always start as not_started with no history."""
        unknown = set(details) - EDITABLE_FIELDS - {"assignees"}
        if unknown:
            raise ValidationError(f"Unknown task fields: {', '.join(sorted(unknown))}")

        return cls(
            project_id=project_id,
            name=name,
            created_by=created_by,
            start_date=start_date,
            end_date=end_date,
            **details
        )

    def validate(self) -> None:
        """Validate task state."""
        if not self.project_id:
            raise ValidationError("Project is required", "project")

        if not self.name or not self.name.strip():
            raise ValidationError("Task name is required", "name")

        if not self.created_by:
            raise ValidationError("Created by is required", "created_by")

        if self.start_date is None:
            raise ValidationError("Start date is required", "start_date")

        if self.end_date is None:
            raise ValidationError("End date is required", "end_date")

        if self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date", "end_date")

        if self.estimated_hours is not None and self.estimated_hours < 0:
            raise ValidationError("Estimated hours cannot be negative", "estimated_hours")

        if not 0 <= self.percentage_complete <= 100:
            raise ValidationError("Percentage complete must be between 0 and 100", "percentage_complete")

        if (
            self.actual_start_time and self.actual_end_time
            and self.actual_end_time < self.actual_start_time
        ):
            raise ValidationError("Actual end time cannot be before actual start time", "actual_end_time")

        if self.id is not None and any(dep.task_id == self.id for dep in self.dependencies):
            raise ValidationError("A task cannot depend on itself", "dependencies")

        # completed_date is set if and only if the task is completed
        if self.status == TaskStatus.COMPLETED and self.completed_date is None:
            self.completed_date = datetime.utcnow()
        elif self.status != TaskStatus.COMPLETED and self.completed_date is not None:
            self.completed_date = None

    @property
    def is_completed(self) -> bool:
        """Check if task is completed."""
        return self.status == TaskStatus.COMPLETED

    def is_overdue_at(self, now: datetime) -> bool:
        """Check if the task is overdue at the given moment."""
        if self.is_completed or self.end_date is None:
            return False
        return now > self.end_date

    @property
    def is_overdue(self) -> bool:
        """Check if task is overdue."""
        return self.is_overdue_at(datetime.utcnow())

    @property
    def assignee_staff_ids(self) -> List[int]:
        return [assignee.staff_id for assignee in self.assignees]

    @property
    def dependency_task_ids(self) -> List[int]:
        return [dependency.task_id for dependency in self.dependencies]

    @property
    def open_issues(self) -> List[TaskIssue]:
        return [issue for issue in self.issues if issue.status in (IssueStatus.OPEN, IssueStatus.IN_PROGRESS)]

    @property
    def checklist_progress(self) -> float:
        """Share of checklist items completed, as a percentage."""
        if not self.checklist:
            return 0.0
        done = sum(1 for item in self.checklist if item.completed)
        return round(done / len(self.checklist) * 100, 2)

    @property
    def completion_minutes(self) -> Optional[int]:
        """Whole minutes, rounded up, between the start date and completion."""
        if not self.start_date or not self.completed_date:
            return None
        elapsed_ms = abs(self.completed_date - self.start_date) // timedelta(milliseconds=1)
        return -(-elapsed_ms // 60000)

    def change_status(
        self,
        new_status: TaskStatus,
        changed_by: str,
        reason: Optional[str] = None
    ) -> bool:
        """
        Move the task to a new status.

        Returns False when the task already has that status, in which case
        nothing is recorded. Otherwise applies completion bookkeeping, appends
        an audit entry and raises the matching domain events.
        """
        new_status = TaskStatus(new_status)
        if new_status == self.status:
            return False

        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise BusinessRuleViolation(
                f"Cannot move task from {self.status.value} to {new_status.value}"
            )

        old_status = self.status
        now = datetime.utcnow()
        self.status = new_status

        if new_status == TaskStatus.COMPLETED:
            self.completed_date = now
            self.percentage_complete = 100
        elif old_status == TaskStatus.COMPLETED:
            self.completed_date = None

        self.status_history.append(StatusChange(
            status=new_status,
            changed_by=changed_by,
            changed_at=now,
            reason=reason
        ))
        self.mark_as_updated()

        self.add_event(TaskStatusChanged(
            task_id=self.id or 0,
            old_status=old_status.value,
            new_status=new_status.value,
            changed_by=changed_by,
            reason=reason
        ))
        if new_status == TaskStatus.COMPLETED:
            self.add_event(TaskCompleted(
                task_id=self.id or 0,
                project_id=self.project_id,
                completed_by=changed_by
            ))
        return True

    def update_details(self, changes: Dict[str, Any]) -> None:
        """Apply a partial update of editable fields and re-validate."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            setattr(self, name, value)

        self.validate()
        self.mark_as_updated()

    def replace_assignees(self, assignees: Iterable[TaskAssignee]) -> None:
        """Replace the crew assigned to this task. Staff already on the task keep their assignment time."""
        assigned_at = {assignee.staff_id: assignee.assigned_at for assignee in self.assignees}
        self.assignees = [
            TaskAssignee(
                staff_id=assignee.staff_id,
                role=assignee.role,
                assigned_at=assigned_at.get(assignee.staff_id, assignee.assigned_at),
            )
            for assignee in assignees
        ]
        self.mark_as_updated()

    def add_comment(
        self,
        user: str,
        content: str,
        attachments: Optional[List[CommentAttachment]] = None
    ) -> TaskComment:
        """Append a comment to the task."""
        if not content or not content.strip():
            raise ValidationError("Comment content cannot be empty", "content")

        comment = TaskComment(user=user, content=content.strip(), attachments=list(attachments or []))
        self.comments.append(comment)
        self.mark_as_updated()
        return comment

    def report_issue(
        self,
        reported_by: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        severity: IssueSeverity = IssueSeverity.MEDIUM,
        assigned_to: Optional[str] = None
    ) -> TaskIssue:
        """Record an issue or blocker against the task."""
        issue = TaskIssue(
            title=title,
            description=description,
            severity=IssueSeverity(severity),
            assigned_to=assigned_to,
            reported_by=reported_by,
        )
        self.issues.append(issue)
        self.mark_as_updated()

        self.add_event(TaskIssueReported(
            task_id=self.id or 0,
            issue_id=issue.id,
            title=issue.title or "",
            severity=issue.severity.value,
            reported_by=reported_by,
            assigned_to=assigned_to
        ))
        return issue

    def get_checklist_item(self, item_id: str) -> ChecklistItem:
        """Find a checklist item by its identifier."""
        for item in self.checklist:
            if item.id == item_id:
                return item
        raise EntityNotFoundError("Checklist item", item_id)

    def update_checklist_item(
        self,
        item_id: str,
        completed: bool,
        notes: Optional[str],
        actor: str
    ) -> ChecklistItem:
        """Mark a checklist item done or not done."""
        item = self.get_checklist_item(item_id)
        item.completed = bool(completed)
        item.notes = notes

        if item.completed:
            item.completed_by = actor
            item.completed_at = datetime.utcnow()
        else:
            item.completed_by = None
            item.completed_at = None

        self.mark_as_updated()
        return item
