"""
Domain models for the construction task tracker.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
)

# Value Objects
from .value_objects import (
    Coordinates,
    Quantity,
    PauseInterval,
)

# Domain entities
from .project import (
    Project,
    ProjectStatus,
    ProjectPriority,
)

from .staff import Staff

from .task import (
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
    ALLOWED_TRANSITIONS,
)

__all__ = [
    # Base
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",

    # Value Objects
    "Coordinates",
    "Quantity",
    "PauseInterval",

    # Project
    "Project",
    "ProjectStatus",
    "ProjectPriority",

    # Staff
    "Staff",

    # Task
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TaskCategory",
    "AssigneeRole",
    "DependencyType",
    "IssueSeverity",
    "IssueStatus",
    "DocumentType",
    "TaskAssignee",
    "TaskDependency",
    "ChecklistItem",
    "CommentAttachment",
    "TaskComment",
    "TaskIssue",
    "TaskDocument",
    "StatusChange",
    "NotificationRecord",
    "ALLOWED_TRANSITIONS",
]
