"""
Tests for the SQLAlchemy task repository against an in-memory database.
"""

import pytest
from datetime import datetime, timedelta

from buildtrack.domain.models.project import Project
from buildtrack.domain.models.staff import Staff
from buildtrack.domain.models.base import DuplicateEntityError
from buildtrack.domain.models.task import (
    Task,
    TaskStatus,
    TaskPriority,
    TaskAssignee,
    AssigneeRole,
    ChecklistItem,
)
from buildtrack.domain.models.value_objects import Coordinates
from buildtrack.domain.repositories.task_repository import TaskFilter, TaskSort
from buildtrack.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from buildtrack.infrastructure.repositories.staff_repository import SQLAlchemyStaffRepository
from buildtrack.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository


BASE_TIME = datetime(2026, 3, 1, 8, 0)


@pytest.fixture
def task_repository(db_session):
    return SQLAlchemyTaskRepository(db_session)


@pytest.fixture
def staff_repository(db_session):
    return SQLAlchemyStaffRepository(db_session)


@pytest.fixture
def project_repository(db_session):
    return SQLAlchemyProjectRepository(db_session)


def make_task(project_id: int, name: str, offset_days: int = 0, **kwargs) -> Task:
    return Task(
        project_id=project_id,
        name=name,
        created_by="user-123",
        start_date=BASE_TIME + timedelta(days=offset_days),
        end_date=BASE_TIME + timedelta(days=offset_days + 2),
        **kwargs
    )


class TestSQLAlchemyTaskRepository:
    """Test cases for task persistence and queries."""

    @pytest.mark.asyncio
    async def test_save_and_load_round_trip(self, task_repository, project_repository, staff_repository):
        """Test sub-documents and assignees survive persistence."""
        project = await project_repository.save(Project(name="Harbour Tower"))
        staff = await staff_repository.save(Staff(name="Nimal Perera", email="nimal@example.com"))
        checklist_item = ChecklistItem(item="Check rebar spacing")
        task = make_task(
            project.id,
            "Pour foundation slab",
            coordinates=Coordinates(lat=6.9271, lng=79.8612),
            assignees=[TaskAssignee(staff_id=staff.id, role=AssigneeRole.LEAD)],
            checklist=[checklist_item],
        )

        saved = await task_repository.save(task)
        loaded = await task_repository.find_by_id(saved.id)

        assert loaded.name == "Pour foundation slab"
        assert loaded.coordinates.lat == 6.9271
        assert loaded.assignees[0].staff_id == staff.id
        assert loaded.assignees[0].role == AssigneeRole.LEAD
        assert loaded.checklist[0].id == checklist_item.id

    @pytest.mark.asyncio
    async def test_update_keeps_assignee_order(self, task_repository, project_repository, staff_repository):
        project = await project_repository.save(Project(name="Harbour Tower"))
        first = await staff_repository.save(Staff(name="Nimal Perera", email="nimal@example.com"))
        second = await staff_repository.save(Staff(name="Ayesha Silva", email="ayesha@example.com"))
        task = await task_repository.save(make_task(project.id, "Install windows"))

        task.replace_assignees([TaskAssignee(staff_id=second.id), TaskAssignee(staff_id=first.id)])
        task.change_status(TaskStatus.IN_PROGRESS, "user-123")
        await task_repository.save(task)
        loaded = await task_repository.find_by_id(task.id)

        assert loaded.assignee_staff_ids == [second.id, first.id]
        assert loaded.status == TaskStatus.IN_PROGRESS
        assert len(loaded.status_history) == 1

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_over_name_and_description(self, task_repository, project_repository):
        """Test search matches the name or the description."""
        project = await project_repository.save(Project(name="Harbour Tower"))
        await task_repository.save(make_task(project.id, "Excavate Foundation"))
        await task_repository.save(make_task(project.id, "Pour slab", description="Over the FOUNDATION footing"))
        await task_repository.save(make_task(project.id, "Paint facade"))

        page = await task_repository.find_page(TaskFilter(search="foundation"), TaskSort())

        assert page.total == 2
        assert {task.name for task in page.items} == {"Excavate Foundation", "Pour slab"}

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, task_repository, project_repository):
        project = await project_repository.save(Project(name="Harbour Tower"))
        await task_repository.save(make_task(project.id, "Reach 50% progress"))
        await task_repository.save(make_task(project.id, "Paint facade"))

        page = await task_repository.find_page(TaskFilter(search="%"), TaskSort())

        assert page.total == 1

    @pytest.mark.asyncio
    async def test_search_folds_non_ascii_case(self, task_repository, project_repository):
        project = await project_repository.save(Project(name="Harbour Tower"))
        await task_repository.save(make_task(project.id, "Ölleitung verlegen"))
        await task_repository.save(make_task(project.id, "Paint facade", description="Façade ÉTANCHÉITÉ"))
        await task_repository.save(make_task(project.id, "Pour slab"))

        by_name = await task_repository.find_page(TaskFilter(search="ÖLLEITUNG"), TaskSort())
        by_description = await task_repository.find_page(TaskFilter(search="étanchéité"), TaskSort())

        assert [task.name for task in by_name.items] == ["Ölleitung verlegen"]
        assert [task.name for task in by_description.items] == ["Paint facade"]

    @pytest.mark.asyncio
    async def test_pagination(self, task_repository, project_repository):
        """Test 25 tasks at 10 per page leave 5 on the third page."""
        project = await project_repository.save(Project(name="Harbour Tower"))
        for index in range(25):
            await task_repository.save(make_task(project.id, f"Task {index:02d}", offset_days=index))

        page = await task_repository.find_page(TaskFilter(), TaskSort(field="startDate", descending=False),
                                               page=3, page_size=10)

        assert len(page.items) == 5
        assert page.total == 25
        assert page.total_pages == 3
        assert page.items[0].name == "Task 20"
        assert page.has_next is False

    @pytest.mark.asyncio
    async def test_filters_combine(self, task_repository, project_repository, staff_repository):
        project = await project_repository.save(Project(name="Harbour Tower"))
        other = await project_repository.save(Project(name="Canal Bridge"))
        staff = await staff_repository.save(Staff(name="Nimal Perera", email="nimal@example.com"))
        await task_repository.save(make_task(
            project.id, "Lay bricks", priority=TaskPriority.HIGH,
            assignees=[TaskAssignee(staff_id=staff.id)]
        ))
        await task_repository.save(make_task(project.id, "Plaster walls", priority=TaskPriority.HIGH))
        await task_repository.save(make_task(
            other.id, "Lay deck", priority=TaskPriority.HIGH,
            assignees=[TaskAssignee(staff_id=staff.id)]
        ))

        page = await task_repository.find_page(
            TaskFilter(project_id=project.id, assignee_id=staff.id, priority=TaskPriority.HIGH),
            TaskSort()
        )

        assert [task.name for task in page.items] == ["Lay bricks"]
        assert await task_repository.count_by_assignee(staff.id) == 2
        assert await task_repository.count_by_project(project.id) == 2

    @pytest.mark.asyncio
    async def test_start_date_range(self, task_repository, project_repository):
        project = await project_repository.save(Project(name="Harbour Tower"))
        for index in range(5):
            await task_repository.save(make_task(project.id, f"Task {index}", offset_days=index))

        page = await task_repository.find_page(
            TaskFilter(start_from=BASE_TIME + timedelta(days=1), start_to=BASE_TIME + timedelta(days=3)),
            TaskSort(field="startDate", descending=False)
        )

        assert [task.name for task in page.items] == ["Task 1", "Task 2", "Task 3"]

    @pytest.mark.asyncio
    async def test_find_existing_ids_and_delete(self, task_repository, project_repository):
        project = await project_repository.save(Project(name="Harbour Tower"))
        task = await task_repository.save(make_task(project.id, "Survey site"))

        assert await task_repository.find_existing_ids([task.id, 999]) == {task.id}
        assert await task_repository.delete(task.id) is True
        assert await task_repository.delete(task.id) is False
        assert await task_repository.find_by_id(task.id) is None


class TestSQLAlchemyStaffRepository:
    """Test cases for staff persistence."""

    @pytest.mark.asyncio
    async def test_duplicate_email(self, staff_repository):
        await staff_repository.save(Staff(name="Nimal Perera", email="nimal@example.com"))

        with pytest.raises(DuplicateEntityError):
            await staff_repository.save(Staff(name="Nimal P.", email="NIMAL@example.com"))

    @pytest.mark.asyncio
    async def test_find_active_ordered_by_name(self, staff_repository):
        await staff_repository.save(Staff(name="Zara Fernando", email="zara@example.com"))
        await staff_repository.save(Staff(name="Ayesha Silva", email="ayesha@example.com"))
        await staff_repository.save(Staff(name="Kamal Dias", email="kamal@example.com", is_active=False))

        active = await staff_repository.find_active()

        assert [member.name for member in active] == ["Ayesha Silva", "Zara Fernando"]
