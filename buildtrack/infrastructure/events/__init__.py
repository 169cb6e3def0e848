"""
Infrastructure event handlers.
Handles domain events raised by the task aggregate.
"""

from .activity_handlers import TaskActivityLogHandler, TaskIssueHandler, TaskCompletionHandler
from .event_setup import setup_event_handlers, initialize_event_system

__all__ = [
    "TaskActivityLogHandler",
    "TaskIssueHandler",
    "TaskCompletionHandler",
    "setup_event_handlers",
    "initialize_event_system",
]
