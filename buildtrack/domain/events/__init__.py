"""
Domain events for the application.
Event-driven components for task activity notifications.
"""

from .base import DomainEvent, EventHandler, EventDispatcher, get_event_dispatcher, publish_event
from .task_events import TaskCreated, TaskStatusChanged, TaskCompleted, TaskIssueReported

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "get_event_dispatcher",
    "publish_event",
    "TaskCreated",
    "TaskStatusChanged",
    "TaskCompleted",
    "TaskIssueReported",
]
