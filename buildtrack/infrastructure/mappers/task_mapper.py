"""
Task mapper for converting between domain entities and database models.
Sub-collections travel as JSON documents; assignees live in their own table.
"""

from typing import List, Optional, Any

from buildtrack.domain.models.task import (
    Task,
    TaskStatus,
    TaskPriority,
    TaskCategory,
    TaskAssignee,
    AssigneeRole,
    TaskDependency,
    ChecklistItem,
    TaskComment,
    TaskIssue,
    TaskDocument,
    StatusChange,
    NotificationRecord,
)
from buildtrack.domain.models.value_objects import Coordinates, Quantity, PauseInterval
from buildtrack.infrastructure.db.models import TaskModel, TaskAssigneeModel


def _dump(items: List[Any]) -> List[dict]:
    return [item.to_dict() for item in items]


def _dump_optional(value: Optional[Any]) -> Optional[dict]:
    return value.to_dict() if value is not None else None


class TaskMapper:
    """Maps between Task domain entity and TaskModel database model."""

    def domain_to_model(self, task: Task) -> TaskModel:
        """Convert Task domain entity to TaskModel."""
        model = TaskModel(id=task.id)
        self.update_model(model, task)
        return model

    def update_model(self, model: TaskModel, task: Task) -> None:
        """Copy every persisted field of the entity onto an existing model."""
        model.project_id = task.project_id
        model.created_by = task.created_by
        model.name = task.name
        model.description = task.description
        model.category = TaskCategory(task.category)
        model.priority = TaskPriority(task.priority)
        model.status = TaskStatus(task.status)
        model.location = task.location
        model.coordinates = _dump_optional(task.coordinates)
        model.milestone = task.milestone

        model.start_date = task.start_date
        model.end_date = task.end_date
        model.estimated_hours = task.estimated_hours
        model.actual_start_time = task.actual_start_time
        model.actual_end_time = task.actual_end_time
        model.paused_time = _dump(task.paused_time)

        model.percentage_complete = task.percentage_complete
        model.quantity_planned = _dump_optional(task.quantity_planned)
        model.quantity_completed = _dump_optional(task.quantity_completed)
        model.completed_date = task.completed_date

        model.dependencies = _dump(task.dependencies)
        model.checklist = _dump(task.checklist)
        model.comments = _dump(task.comments)
        model.issues = _dump(task.issues)
        model.documents = _dump(task.documents)
        model.status_history = _dump(task.status_history)
        model.notifications_sent = _dump(task.notifications_sent)

        model.created_at = task.created_at
        model.updated_at = task.updated_at

        # Replacing the collection lets delete-orphan drop the old rows
        model.assignees = [
            TaskAssigneeModel(
                staff_id=assignee.staff_id,
                role=AssigneeRole(assignee.role),
                position=position,
                assigned_at=assignee.assigned_at,
            )
            for position, assignee in enumerate(task.assignees)
        ]

    def model_to_domain(self, model: TaskModel) -> Task:
        """Convert TaskModel to Task domain entity."""
        return Task(
            id=model.id,
            project_id=model.project_id,
            created_by=model.created_by,
            name=model.name,
            description=model.description,
            category=TaskCategory(model.category) if model.category else TaskCategory.CONSTRUCTION,
            priority=TaskPriority(model.priority) if model.priority else TaskPriority.MEDIUM,
            status=TaskStatus(model.status) if model.status else TaskStatus.NOT_STARTED,
            location=model.location,
            coordinates=Coordinates.from_dict(model.coordinates),
            milestone=model.milestone,
            start_date=model.start_date,
            end_date=model.end_date,
            estimated_hours=model.estimated_hours,
            actual_start_time=model.actual_start_time,
            actual_end_time=model.actual_end_time,
            paused_time=[PauseInterval.from_dict(p) for p in model.paused_time or []],
            assignees=[
                TaskAssignee(
                    staff_id=row.staff_id,
                    role=AssigneeRole(row.role),
                    assigned_at=row.assigned_at,
                )
                for row in model.assignees
            ],
            dependencies=[TaskDependency.from_dict(d) for d in model.dependencies or []],
            percentage_complete=model.percentage_complete or 0,
            quantity_planned=Quantity.from_dict(model.quantity_planned),
            quantity_completed=Quantity.from_dict(model.quantity_completed),
            completed_date=model.completed_date,
            checklist=[ChecklistItem.from_dict(c) for c in model.checklist or []],
            comments=[TaskComment.from_dict(c) for c in model.comments or []],
            issues=[TaskIssue.from_dict(i) for i in model.issues or []],
            documents=[TaskDocument.from_dict(d) for d in model.documents or []],
            status_history=[StatusChange.from_dict(s) for s in model.status_history or []],
            notifications_sent=[NotificationRecord.from_dict(n) for n in model.notifications_sent or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
