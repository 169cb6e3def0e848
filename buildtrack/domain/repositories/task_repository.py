"""
Task repository interface.
Defines the contract for task data persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Iterable, Set
from datetime import datetime

from buildtrack.domain.models.task import Task, TaskStatus, TaskPriority, TaskCategory
from buildtrack.domain.repositories.base import Page


# Sort keys accepted by the list operation, in their wire spelling.
TASK_SORT_FIELDS = frozenset({
    "createdAt", "updatedAt", "name", "startDate", "endDate",
    "priority", "status", "category", "percentageComplete",
})


@dataclass
class TaskFilter:
    """
    Conditions for listing tasks. Every condition is optional and they are
    combined with AND; the search term matches name OR description.
    """

    project_id: Optional[int] = None
    assignee_id: Optional[int] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[TaskCategory] = None
    start_from: Optional[datetime] = None
    start_to: Optional[datetime] = None
    search: Optional[str] = None


@dataclass
class TaskSort:
    field: str = "createdAt"
    descending: bool = True


class TaskRepository(ABC):
    """
    Repository interface for Task entity.
    Defines all operations needed for task data persistence.
    """

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """
        Save a task entity.
        Returns the saved task with its identifier and timestamps.
        """
        pass

    @abstractmethod
    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """
        Find a task by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        task_filter: TaskFilter,
        sort: TaskSort,
        page: int = 1,
        page_size: int = 10
    ) -> Page[Task]:
        """
        Find one page of tasks matching the filter, with the total count.
        """
        pass

    @abstractmethod
    async def find_for_analytics(
        self,
        project_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None
    ) -> List[Task]:
        """
        Find every task in a project and/or creation-date window.
        """
        pass

    @abstractmethod
    async def find_existing_ids(self, task_ids: Iterable[int]) -> Set[int]:
        """
        Return the subset of the given identifiers that belong to stored tasks.
        """
        pass

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        """
        Delete a task by ID.
        Returns True if deleted, False if not found. Dependent tasks are untouched.
        """
        pass

    @abstractmethod
    async def count_by_project(self, project_id: int) -> int:
        """
        Count tasks belonging to a project.
        """
        pass

    @abstractmethod
    async def count_by_assignee(self, staff_id: int) -> int:
        """
        Count tasks a staff member is assigned to.
        """
        pass
