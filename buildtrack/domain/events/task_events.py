"""
Task domain events.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

from buildtrack.domain.events.base import DomainEvent


@dataclass
class TaskCreated(DomainEvent):
    """A task was created."""

    task_id: int = 0
    project_id: int = 0
    name: str = ""
    created_by: str = ""

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "project_id": self.project_id,
            "name": self.name,
            "created_by": self.created_by,
        }


@dataclass
class TaskStatusChanged(DomainEvent):
    """A task moved from one status to another."""

    task_id: int = 0
    old_status: str = ""
    new_status: str = ""
    changed_by: str = ""
    reason: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "old_status": self.old_status,
            "new_status": self.new_status,
            "changed_by": self.changed_by,
            "reason": self.reason,
        }


@dataclass
class TaskCompleted(DomainEvent):
    """A task reached the completed status."""

    task_id: int = 0
    project_id: int = 0
    completed_by: str = ""

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "project_id": self.project_id,
            "completed_by": self.completed_by,
        }


@dataclass
class TaskIssueReported(DomainEvent):
    """An issue or blocker was reported against a task."""

    task_id: int = 0
    issue_id: str = ""
    title: str = ""
    severity: str = ""
    reported_by: str = ""
    assigned_to: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "issue_id": self.issue_id,
            "title": self.title,
            "severity": self.severity,
            "reported_by": self.reported_by,
            "assigned_to": self.assigned_to,
        }
