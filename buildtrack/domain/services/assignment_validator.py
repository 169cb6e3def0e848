"""
Assignment validator.
Checks that the references a task carries resolve before it is persisted.
"""

from typing import Iterable, Optional, Sequence, List

from buildtrack.domain.models.base import ValidationError, EntityNotFoundError
from buildtrack.domain.models.project import Project
from buildtrack.domain.models.task import TaskAssignee, TaskDependency
from buildtrack.domain.repositories.project_repository import ProjectRepository
from buildtrack.domain.repositories.staff_repository import StaffRepository
from buildtrack.domain.repositories.task_repository import TaskRepository


class AssignmentValidator:
    """
    Domain service validating project, assignee and dependency references.
    Has no side effects; staff and dependency ids are each resolved in one lookup.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        staff_repository: StaffRepository,
        task_repository: Optional[TaskRepository] = None
    ):
        self.project_repository = project_repository
        self.staff_repository = staff_repository
        self.task_repository = task_repository

    async def validate_project(self, project_id: int) -> Project:
        project = await self.project_repository.find_by_id(project_id)
        if not project:
            raise EntityNotFoundError("Project", project_id)
        return project

    async def validate_assignees(self, assignees: Sequence[TaskAssignee]) -> None:
        """
        Ensure every assignee resolves to an existing staff member.
        """
        requested = _distinct(assignee.staff_id for assignee in assignees)
        if not requested:
            return

        found = {staff.id for staff in await self.staff_repository.find_by_ids(requested)}
        missing = [staff_id for staff_id in requested if staff_id not in found]
        if missing:
            raise ValidationError(
                "One or more assignees not found",
                "assignees",
                {"missing_ids": missing}
            )

    async def validate_dependencies(
        self,
        dependencies: Sequence[TaskDependency],
        task_id: Optional[int] = None
    ) -> None:
        """
        Ensure every dependency points at another existing task.
        """
        requested = _distinct(dependency.task_id for dependency in dependencies)
        if not requested:
            return

        if task_id is not None and task_id in requested:
            raise ValidationError("A task cannot depend on itself", "dependencies")

        if self.task_repository is None:
            return

        found = await self.task_repository.find_existing_ids(requested)
        missing = [dep_id for dep_id in requested if dep_id not in found]
        if missing:
            raise ValidationError(
                "One or more dependencies not found",
                "dependencies",
                {"missing_ids": missing}
            )

    async def validate(
        self,
        project_id: int,
        assignees: Sequence[TaskAssignee] = (),
        dependencies: Sequence[TaskDependency] = (),
        task_id: Optional[int] = None
    ) -> Project:
        """Run every reference check for a task and return its project."""
        project = await self.validate_project(project_id)
        await self.validate_assignees(assignees)
        await self.validate_dependencies(dependencies, task_id)
        return project


def _distinct(ids: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(ids))
