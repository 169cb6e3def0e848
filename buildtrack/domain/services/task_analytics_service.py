"""Analytics service for task progress reporting.
Aggregates status counts, completion rate, overdue count and average completion time.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Dict, Any

from buildtrack.domain.models.task import Task, TaskStatus, CLOSED_STATUSES


@dataclass
class TaskAnalytics:
    """Aggregated figures over a set of tasks."""

    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    not_started_tasks: int = 0
    on_hold_tasks: int = 0
    cancelled_tasks: int = 0
    overdue_tasks: int = 0
    completion_rate: float = 0.0
    average_completion_time: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TaskAnalyticsService:
    """
    Domain service computing task analytics.
    Works on tasks already narrowed by project and creation window.
    """

    _STATUS_FIELDS = {
        TaskStatus.COMPLETED: "completed_tasks",
        TaskStatus.IN_PROGRESS: "in_progress_tasks",
        TaskStatus.NOT_STARTED: "not_started_tasks",
        TaskStatus.ON_HOLD: "on_hold_tasks",
        TaskStatus.CANCELLED: "cancelled_tasks",
    }

    def calculate(self, tasks: Iterable[Task], now: Optional[datetime] = None) -> TaskAnalytics:
        """
        Compute analytics in a single pass over the tasks.
        """
        now = now or datetime.utcnow()
        analytics = TaskAnalytics()
        completion_minutes = []

        for task in tasks:
            analytics.total_tasks += 1

            status_field = self._STATUS_FIELDS[TaskStatus(task.status)]
            setattr(analytics, status_field, getattr(analytics, status_field) + 1)

            if task.end_date and task.end_date < now and task.status not in CLOSED_STATUSES:
                analytics.overdue_tasks += 1

            if task.status == TaskStatus.COMPLETED:
                minutes = task.completion_minutes
                if minutes is not None:
                    completion_minutes.append(minutes)

        analytics.completion_rate = self.completion_rate(analytics.completed_tasks, analytics.total_tasks)
        analytics.average_completion_time = self.average_minutes(completion_minutes)
        return analytics

    @staticmethod
    def completion_rate(completed: int, total: int) -> float:
        """Completed share as a percentage rounded to two decimals."""
        if total == 0:
            return 0.0
        rate = Decimal(completed) * 100 / Decimal(total)
        return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    @staticmethod
    def average_minutes(minutes: list) -> int:
        """Mean of the given durations rounded to the nearest whole minute."""
        if not minutes:
            return 0
        mean = Decimal(sum(minutes)) / Decimal(len(minutes))
        return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
