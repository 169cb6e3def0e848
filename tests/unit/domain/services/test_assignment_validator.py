"""
Unit tests for AssignmentValidator.
"""

import pytest

from buildtrack.domain.models.base import ValidationError, EntityNotFoundError
from buildtrack.domain.models.project import Project
from buildtrack.domain.models.staff import Staff
from buildtrack.domain.models.task import TaskAssignee, TaskDependency
from buildtrack.domain.services.assignment_validator import AssignmentValidator


class InMemoryProjects:
    def __init__(self, *projects):
        self.projects = {project.id: project for project in projects}

    async def find_by_id(self, project_id):
        return self.projects.get(project_id)


class InMemoryStaff:
    def __init__(self, *staff):
        self.staff = {member.id: member for member in staff}
        self.lookups = 0

    async def find_by_ids(self, staff_ids):
        self.lookups += 1
        return [self.staff[staff_id] for staff_id in staff_ids if staff_id in self.staff]


class InMemoryTasks:
    def __init__(self, *task_ids):
        self.task_ids = set(task_ids)

    async def find_existing_ids(self, task_ids):
        return {task_id for task_id in task_ids if task_id in self.task_ids}


@pytest.fixture
def validator():
    return AssignmentValidator(
        InMemoryProjects(Project(id=1, name="Harbour Tower")),
        InMemoryStaff(
            Staff(id=5, name="Nimal Perera", email="nimal@example.com"),
            Staff(id=7, name="Ayesha Silva", email="ayesha@example.com"),
        ),
        InMemoryTasks(100, 101),
    )


class TestAssignmentValidator:
    """Test cases for reference validation."""

    @pytest.mark.asyncio
    async def test_validate_all_references(self, validator):
        """Test a task whose references all resolve."""
        project = await validator.validate(
            1,
            assignees=[TaskAssignee(staff_id=5), TaskAssignee(staff_id=7)],
            dependencies=[TaskDependency(task_id=100)],
        )

        assert project.name == "Harbour Tower"

    @pytest.mark.asyncio
    async def test_unknown_project(self, validator):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await validator.validate(99)

        assert exc_info.value.message == "Project not found"

    @pytest.mark.asyncio
    async def test_unknown_assignee(self, validator):
        """Test that missing staff are reported together."""
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate_assignees([
                TaskAssignee(staff_id=5),
                TaskAssignee(staff_id=8),
                TaskAssignee(staff_id=9),
            ])

        assert exc_info.value.message == "One or more assignees not found"
        assert exc_info.value.field == "assignees"
        assert exc_info.value.details == {"missing_ids": [8, 9]}

    @pytest.mark.asyncio
    async def test_assignees_resolved_in_one_lookup(self, validator):
        await validator.validate_assignees([TaskAssignee(staff_id=5), TaskAssignee(staff_id=7)])

        assert validator.staff_repository.lookups == 1

    @pytest.mark.asyncio
    async def test_no_assignees_skips_lookup(self, validator):
        await validator.validate_assignees([])

        assert validator.staff_repository.lookups == 0

    @pytest.mark.asyncio
    async def test_unknown_dependency(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate_dependencies([TaskDependency(task_id=100), TaskDependency(task_id=555)])

        assert exc_info.value.message == "One or more dependencies not found"
        assert exc_info.value.details == {"missing_ids": [555]}

    @pytest.mark.asyncio
    async def test_self_dependency(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate_dependencies([TaskDependency(task_id=101)], task_id=101)

        assert exc_info.value.message == "A task cannot depend on itself"
