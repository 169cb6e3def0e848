"""
Unit tests for task analytics.
"""

from datetime import datetime

from buildtrack.domain.models.task import Task, TaskStatus
from buildtrack.domain.services.task_analytics_service import TaskAnalyticsService


NOW = datetime(2026, 6, 1, 12, 0)


def make_task(status=TaskStatus.NOT_STARTED, end_date=datetime(2026, 7, 1), **kwargs) -> Task:
    return Task(
        project_id=1,
        name="Install drywall",
        created_by="user-123",
        start_date=kwargs.pop("start_date", datetime(2026, 5, 1, 8, 0)),
        end_date=end_date,
        status=status,
        **kwargs
    )


class TestTaskAnalyticsService:
    """Test cases for TaskAnalyticsService."""

    def setup_method(self):
        self.service = TaskAnalyticsService()

    def test_empty_task_set(self):
        """Test analytics over no tasks are all zero."""
        analytics = self.service.calculate([], now=NOW)

        assert analytics.total_tasks == 0
        assert analytics.completion_rate == 0.0
        assert analytics.average_completion_time == 0
        assert analytics.overdue_tasks == 0

    def test_status_counts(self):
        tasks = [
            make_task(TaskStatus.NOT_STARTED),
            make_task(TaskStatus.IN_PROGRESS),
            make_task(TaskStatus.IN_PROGRESS),
            make_task(TaskStatus.ON_HOLD),
            make_task(TaskStatus.CANCELLED),
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 9, 0)),
        ]

        analytics = self.service.calculate(tasks, now=NOW)

        assert analytics.total_tasks == 6
        assert analytics.not_started_tasks == 1
        assert analytics.in_progress_tasks == 2
        assert analytics.on_hold_tasks == 1
        assert analytics.cancelled_tasks == 1
        assert analytics.completed_tasks == 1

    def test_completion_rate_rounds_to_two_decimals(self):
        """Test one completed task out of three gives 33.33."""
        tasks = [
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 9, 0)),
            make_task(TaskStatus.IN_PROGRESS),
            make_task(TaskStatus.NOT_STARTED),
        ]

        analytics = self.service.calculate(tasks, now=NOW)

        assert analytics.completion_rate == 33.33

    def test_completion_rate_helper(self):
        assert TaskAnalyticsService.completion_rate(9, 10) == 90.0
        assert TaskAnalyticsService.completion_rate(2, 3) == 66.67
        assert TaskAnalyticsService.completion_rate(0, 0) == 0.0

    def test_overdue_excludes_closed_tasks(self):
        """Test only open tasks past their end date count as overdue."""
        past = datetime(2026, 5, 15)
        tasks = [
            make_task(TaskStatus.IN_PROGRESS, end_date=past),
            make_task(TaskStatus.ON_HOLD, end_date=past),
            make_task(TaskStatus.CANCELLED, end_date=past),
            make_task(TaskStatus.COMPLETED, end_date=past, completed_date=datetime(2026, 5, 10)),
            make_task(TaskStatus.IN_PROGRESS),
        ]

        analytics = self.service.calculate(tasks, now=NOW)

        assert analytics.overdue_tasks == 2

    def test_average_completion_time(self):
        """Test average minutes from start to completion, half rounded up."""
        tasks = [
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 9, 30)),
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 8, 1)),
            make_task(TaskStatus.IN_PROGRESS),
        ]

        analytics = self.service.calculate(tasks, now=NOW)

        # (90 + 1) / 2 = 45.5
        assert analytics.average_completion_time == 46

    def test_average_of_one_and_two_hours(self):
        tasks = [
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 9, 0)),
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 10, 0)),
        ]

        analytics = self.service.calculate(tasks, now=NOW)

        assert analytics.average_completion_time == 90
        assert analytics.completion_rate == 100.0

    def test_partial_minutes_round_up_per_task(self):
        tasks = [
            make_task(TaskStatus.COMPLETED, completed_date=datetime(2026, 5, 1, 8, 0, 1)),
        ]

        analytics = self.service.calculate(tasks, now=NOW)

        assert analytics.average_completion_time == 1

    def test_to_dict(self):
        analytics = self.service.calculate([make_task()], now=NOW)

        data = analytics.to_dict()

        assert data["total_tasks"] == 1
        assert set(data) == {
            "total_tasks", "completed_tasks", "in_progress_tasks", "not_started_tasks",
            "on_hold_tasks", "cancelled_tasks", "overdue_tasks", "completion_rate",
            "average_completion_time",
        }
