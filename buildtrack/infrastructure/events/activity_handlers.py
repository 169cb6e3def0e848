"""
Event handlers recording task activity.
Turns domain events into structured log lines.
"""

import logging

from buildtrack.domain.events.base import EventHandler, DomainEvent
from buildtrack.domain.events.task_events import TaskIssueReported, TaskCompleted


logger = logging.getLogger(__name__)

# Issue severities surfaced at WARNING level
URGENT_SEVERITIES = frozenset({"high", "critical"})


class TaskActivityLogHandler(EventHandler):
    """Logs every domain event."""

    def can_handle(self, event: DomainEvent) -> bool:
        return True

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Task activity: {event.event_type} (ID: {event.event_id}) {event._get_event_data()}")


class TaskIssueHandler(EventHandler):
    """Escalates serious issues reported against tasks."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, TaskIssueReported)

    async def handle(self, event: DomainEvent) -> None:
        if event.severity in URGENT_SEVERITIES:
            logger.warning(
                f"{event.severity.capitalize()} issue '{event.title}' reported on task {event.task_id} "
                f"by {event.reported_by}"
            )


class TaskCompletionHandler(EventHandler):
    """Records task completions."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, TaskCompleted)

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Task {event.task_id} in project {event.project_id} completed by {event.completed_by}")
