"""
Task repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List, Iterable, Set
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func, or_

from buildtrack.domain.models.task import Task
from buildtrack.domain.repositories.base import Page
from buildtrack.config import settings
from buildtrack.infrastructure.pagination import OffsetPagination
from buildtrack.domain.repositories.task_repository import TaskRepository, TaskFilter, TaskSort
from buildtrack.domain.models.base import EntityNotFoundError, ValidationError
from buildtrack.infrastructure.db.models import TaskModel, TaskAssigneeModel
from buildtrack.infrastructure.mappers.task_mapper import TaskMapper


SORT_COLUMNS = {
    "createdAt": TaskModel.created_at,
    "updatedAt": TaskModel.updated_at,
    "name": TaskModel.name,
    "startDate": TaskModel.start_date,
    "endDate": TaskModel.end_date,
    "priority": TaskModel.priority,
    "status": TaskModel.status,
    "category": TaskModel.category,
    "percentageComplete": TaskModel.percentage_complete,
}


class SQLAlchemyTaskRepository(TaskRepository):
    """SQLAlchemy implementation of task repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TaskMapper()
        self.paginator = OffsetPagination(max_page_size=settings.max_page_size)

    def _query(self):
        return self.session.query(TaskModel).options(selectinload(TaskModel.assignees))

    async def save(self, task: Task) -> Task:
        """Save a task entity."""
        if task.is_new:
            # Create new task
            model = self.mapper.domain_to_model(task)
            self.session.add(model)
        else:
            # Update existing task
            model = self._query().filter_by(id=task.id).first()
            if not model:
                raise EntityNotFoundError("Task", task.id)
            self.mapper.update_model(model, task)

        self.session.commit()
        # Return updated task with ID
        if task.is_new:
            task.id = model.id
        return task

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """Get task by ID."""
        model = self._query().filter_by(id=task_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    async def find_page(
        self,
        task_filter: TaskFilter,
        sort: TaskSort,
        page: int = 1,
        page_size: int = 10
    ) -> Page[Task]:
        """Get one page of tasks matching the filter."""
        column = SORT_COLUMNS.get(sort.field)
        if column is None:
            raise ValidationError(f"Invalid value for sortBy: {sort.field}", "sortBy")

        query = self._apply_filter(self._query(), task_filter)
        if sort.descending:
            query = query.order_by(column.desc(), TaskModel.id.desc())
        else:
            query = query.order_by(column.asc(), TaskModel.id.asc())

        return self.paginator.paginate(query, page, page_size, self.mapper.model_to_domain)

    async def find_for_analytics(
        self,
        project_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None
    ) -> List[Task]:
        """Get every task in the project and creation window."""
        query = self._query()

        if project_id is not None:
            query = query.filter(TaskModel.project_id == project_id)
        if created_from is not None:
            query = query.filter(TaskModel.created_at >= created_from)
        if created_to is not None:
            query = query.filter(TaskModel.created_at <= created_to)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    async def find_existing_ids(self, task_ids: Iterable[int]) -> Set[int]:
        """Get the identifiers among task_ids that exist."""
        task_ids = list(task_ids)
        if not task_ids:
            return set()

        rows = self.session.query(TaskModel.id).filter(TaskModel.id.in_(task_ids)).all()
        return {row[0] for row in rows}

    async def delete(self, task_id: int) -> bool:
        """Delete task by ID."""
        model = self.session.query(TaskModel).filter_by(id=task_id).first()

        if not model:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    async def count_by_project(self, project_id: int) -> int:
        """Get task count for project."""
        return self.session.query(func.count(TaskModel.id)).filter_by(
            project_id=project_id
        ).scalar()

    async def count_by_assignee(self, staff_id: int) -> int:
        """Get number of tasks the staff member is assigned to."""
        return self.session.query(
            func.count(func.distinct(TaskAssigneeModel.task_id))
        ).filter(TaskAssigneeModel.staff_id == staff_id).scalar()

    @staticmethod
    def _apply_filter(query, task_filter: TaskFilter):
        """Combine every supplied condition with AND."""
        if task_filter.project_id is not None:
            query = query.filter(TaskModel.project_id == task_filter.project_id)

        if task_filter.assignee_id is not None:
            query = query.filter(
                TaskModel.assignees.any(TaskAssigneeModel.staff_id == task_filter.assignee_id)
            )

        if task_filter.status is not None:
            query = query.filter(TaskModel.status == task_filter.status)

        if task_filter.priority is not None:
            query = query.filter(TaskModel.priority == task_filter.priority)

        if task_filter.category is not None:
            query = query.filter(TaskModel.category == task_filter.category)

        if task_filter.start_from is not None:
            query = query.filter(TaskModel.start_date >= task_filter.start_from)

        if task_filter.start_to is not None:
            query = query.filter(TaskModel.start_date <= task_filter.start_to)

        if task_filter.search:
            term = task_filter.search.lower()
            query = query.filter(or_(
                func.lower(TaskModel.name).contains(term, autoescape=True),
                func.lower(func.coalesce(TaskModel.description, "")).contains(term, autoescape=True),
            ))

        return query
