"""
Unit tests for Task domain model.
"""

import pytest
from datetime import datetime, timedelta

from buildtrack.domain.models.base import ValidationError, EntityNotFoundError
from buildtrack.domain.models.task import (
    Task,
    TaskStatus,
    TaskAssignee,
    AssigneeRole,
    ChecklistItem,
    TaskDependency,
    IssueSeverity,
)
from buildtrack.domain.events.task_events import TaskStatusChanged, TaskCompleted, TaskIssueReported


def make_task(**overrides) -> Task:
    fields = dict(
        id=1,
        project_id=10,
        name="Pour foundation slab",
        created_by="user-123",
        start_date=datetime(2026, 3, 1, 8, 0),
        end_date=datetime(2026, 3, 5, 17, 0),
    )
    fields.update(overrides)
    return Task(**fields)


class TestTaskCreation:
    """Test cases for task creation and validation."""

    def test_create_task_defaults(self):
        """Test a new task starts not started with empty collections."""
        task = Task.create(
            project_id=10,
            name="Erect scaffolding",
            created_by="user-123",
            start_date=datetime(2026, 3, 1),
            end_date=datetime(2026, 3, 2),
        )

        assert task.is_new
        assert task.status == TaskStatus.NOT_STARTED
        assert task.percentage_complete == 0
        assert task.completed_date is None
        assert task.status_history == []
        assert task.assignees == []
        assert task.checklist == []

    def test_create_task_rejects_unknown_fields(self):
        """Test that fields outside the editable set are refused."""
        with pytest.raises(ValidationError):
            Task.create(
                project_id=10,
                name="Erect scaffolding",
                created_by="user-123",
                start_date=datetime(2026, 3, 1),
                end_date=datetime(2026, 3, 2),
                status=TaskStatus.COMPLETED,
            )

    def test_end_date_before_start_date(self):
        """Test that the schedule must not run backwards."""
        with pytest.raises(ValidationError) as exc_info:
            make_task(start_date=datetime(2026, 3, 5), end_date=datetime(2026, 3, 1))

        assert exc_info.value.field == "end_date"

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            make_task(name="   ")

    def test_percentage_out_of_range(self):
        with pytest.raises(ValidationError):
            make_task(percentage_complete=120)

    def test_self_dependency(self):
        """Test that a task cannot depend on itself."""
        with pytest.raises(ValidationError):
            make_task(dependencies=[TaskDependency(task_id=1)])


class TestTaskStatus:
    """Test cases for the status lifecycle."""

    def test_complete_task(self):
        """Test completion sets the date, the percentage and the history."""
        task = make_task(status=TaskStatus.IN_PROGRESS)

        changed = task.change_status(TaskStatus.COMPLETED, "user-123", "Inspected")

        assert changed is True
        assert task.status == TaskStatus.COMPLETED
        assert task.completed_date is not None
        assert task.percentage_complete == 100
        assert len(task.status_history) == 1
        assert task.status_history[0].status == TaskStatus.COMPLETED
        assert task.status_history[0].changed_by == "user-123"
        assert task.status_history[0].reason == "Inspected"

    def test_complete_task_raises_events(self):
        task = make_task()

        task.change_status(TaskStatus.COMPLETED, "user-123")
        events = task.pull_events()

        assert [type(event) for event in events] == [TaskStatusChanged, TaskCompleted]
        assert events[0].old_status == "not_started"
        assert events[0].new_status == "completed"
        assert task.pull_events() == []

    def test_same_status_is_noop(self):
        """Test re-applying the current status records nothing."""
        task = make_task(status=TaskStatus.IN_PROGRESS)
        updated_at = task.updated_at

        changed = task.change_status(TaskStatus.IN_PROGRESS, "user-123")

        assert changed is False
        assert task.status_history == []
        assert task.pull_events() == []
        assert task.updated_at == updated_at

    def test_reopen_clears_completed_date(self):
        """Test leaving completed clears the completion date."""
        task = make_task()
        task.change_status(TaskStatus.COMPLETED, "user-123")

        task.change_status(TaskStatus.IN_PROGRESS, "user-456")

        assert task.completed_date is None
        assert len(task.status_history) == 2

    def test_cancelled_task_can_restart(self):
        task = make_task(status=TaskStatus.CANCELLED)

        assert task.change_status(TaskStatus.NOT_STARTED, "user-123") is True

    def test_completed_status_fills_completed_date(self):
        """Test a task loaded as completed always carries a completion date."""
        task = make_task(status=TaskStatus.COMPLETED)

        assert task.completed_date is not None

    def test_completion_minutes_rounds_up(self):
        task = make_task(
            status=TaskStatus.COMPLETED,
            completed_date=datetime(2026, 3, 1, 8, 0, 30),
        )

        assert task.completion_minutes == 1

    def test_is_overdue_at(self):
        task = make_task()

        assert task.is_overdue_at(datetime(2026, 3, 6)) is True
        assert task.is_overdue_at(datetime(2026, 3, 4)) is False

    def test_completed_task_is_never_overdue(self):
        task = make_task(status=TaskStatus.COMPLETED)

        assert task.is_overdue_at(datetime(2027, 1, 1)) is False


class TestTaskCollaboration:
    """Test cases for assignees, checklist, comments and issues."""

    def test_replace_assignees_keeps_assignment_time(self):
        """Test staff staying on the task keep their original assignment time."""
        original = datetime(2026, 2, 1, 9, 0)
        task = make_task(assignees=[TaskAssignee(staff_id=5, role=AssigneeRole.MEMBER, assigned_at=original)])

        task.replace_assignees([
            TaskAssignee(staff_id=5, role=AssigneeRole.LEAD),
            TaskAssignee(staff_id=7),
        ])

        assert task.assignee_staff_ids == [5, 7]
        assert task.assignees[0].role == AssigneeRole.LEAD
        assert task.assignees[0].assigned_at == original
        assert task.assignees[1].assigned_at != original

    def test_update_checklist_item(self):
        item = ChecklistItem(item="Check rebar spacing")
        task = make_task(checklist=[item, ChecklistItem(item="Check formwork")])

        updated = task.update_checklist_item(item.id, completed=True, notes="OK", actor="user-123")

        assert updated.completed is True
        assert updated.completed_by == "user-123"
        assert updated.completed_at is not None
        assert updated.notes == "OK"
        assert task.checklist_progress == 50.0

    def test_uncheck_checklist_item_clears_completion(self):
        item = ChecklistItem(item="Check rebar spacing", completed=True, completed_by="user-1",
                             completed_at=datetime(2026, 3, 2))
        task = make_task(checklist=[item])

        task.update_checklist_item(item.id, completed=False, notes=None, actor="user-123")

        assert item.completed_by is None
        assert item.completed_at is None

    def test_unknown_checklist_item(self):
        task = make_task()

        with pytest.raises(EntityNotFoundError):
            task.update_checklist_item("missing", completed=True, notes=None, actor="user-123")

    def test_add_comment(self):
        task = make_task()

        comment = task.add_comment("user-123", "  Concrete truck delayed  ")

        assert comment.content == "Concrete truck delayed"
        assert comment.user == "user-123"
        assert task.comments == [comment]

    def test_add_empty_comment(self):
        task = make_task()

        with pytest.raises(ValidationError):
            task.add_comment("user-123", "   ")

    def test_report_issue(self):
        """Test an issue starts open and raises an event."""
        task = make_task()

        issue = task.report_issue("user-123", title="Crack in slab", severity=IssueSeverity.HIGH)

        assert issue.status.value == "open"
        assert issue.reported_by == "user-123"
        assert task.open_issues == [issue]
        events = task.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], TaskIssueReported)
        assert events[0].severity == "high"

    def test_update_details_rejects_protected_fields(self):
        task = make_task()

        with pytest.raises(ValidationError):
            task.update_details({"created_by": "someone-else"})

    def test_update_details_revalidates(self):
        task = make_task()

        with pytest.raises(ValidationError):
            task.update_details({"end_date": task.start_date - timedelta(days=1)})
