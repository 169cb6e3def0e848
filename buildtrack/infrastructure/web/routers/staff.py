"""
Staff directory router.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, status, Query

from buildtrack.config import settings
from buildtrack.infrastructure.auth import get_current_user_id
from buildtrack.application.dto.base_dto import BlankAsNone
from buildtrack.application.use_cases.staff_use_cases import (
    CreateStaffUseCase,
    GetStaffUseCase,
    ListStaffUseCase,
    ListAssigneeOptionsUseCase,
    UpdateStaffUseCase,
    DeleteStaffUseCase
)
from buildtrack.application.dto.staff_dto import (
    CreateStaffRequestDTO,
    UpdateStaffRequestDTO,
    ListStaffRequestDTO
)
from buildtrack.infrastructure.db.database import get_db
from buildtrack.infrastructure.repositories.staff_repository import SQLAlchemyStaffRepository
from buildtrack.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from buildtrack.infrastructure.web.results import unwrap


router = APIRouter()


def get_staff_repository(session=Depends(get_db)):
    """Dependency to get staff repository."""
    return SQLAlchemyStaffRepository(session)


def get_task_repository(session=Depends(get_db)):
    return SQLAlchemyTaskRepository(session)


StaffRepositoryDep = Annotated[SQLAlchemyStaffRepository, Depends(get_staff_repository)]
UserIdDep = Annotated[str, Depends(get_current_user_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_staff(
    request: CreateStaffRequestDTO,
    user_id: UserIdDep,
    repository: StaffRepositoryDep
):
    """Register a staff member. The email must be unique."""
    use_case = CreateStaffUseCase(repository)
    staff = unwrap(await use_case.execute(request))
    return {"message": "Staff member created successfully", "staff": staff.to_response()}


@router.get("")
async def list_staff(
    user_id: UserIdDep,
    repository: StaffRepositoryDep,
    search: Annotated[Optional[str], BlankAsNone, Query(max_length=255, description="Search name, email or position")] = None,
    department: Annotated[Optional[str], BlankAsNone, Query(description="Filter by department")] = None,
    is_active: Annotated[Optional[bool], BlankAsNone, Query(alias="isActive", description="Filter by active flag")] = None,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.default_page_size, ge=1, description="Items per page")
):
    """List staff ordered by name."""
    request = ListStaffRequestDTO(
        search=search,
        department=department,
        is_active=is_active,
        page=page,
        page_size=limit
    )
    use_case = ListStaffUseCase(repository, settings.default_page_size, settings.max_page_size)
    return unwrap(await use_case.execute(request)).to_response()


@router.get("/assignees")
async def list_assignee_options(
    user_id: UserIdDep,
    repository: StaffRepositoryDep
):
    """Active staff available for task assignment, ordered by name."""
    use_case = ListAssigneeOptionsUseCase(repository)
    options = unwrap(await use_case.execute(None))
    return {"staff": [option.to_response() for option in options]}


@router.get("/{staff_id}")
async def get_staff(
    staff_id: int,
    user_id: UserIdDep,
    repository: StaffRepositoryDep
):
    use_case = GetStaffUseCase(repository)
    staff = unwrap(await use_case.execute(staff_id))
    return {"staff": staff.to_response()}


@router.put("/{staff_id}")
async def update_staff(
    staff_id: int,
    request: UpdateStaffRequestDTO,
    user_id: UserIdDep,
    repository: StaffRepositoryDep
):
    request.id = staff_id
    use_case = UpdateStaffUseCase(repository)
    staff = unwrap(await use_case.execute(request))
    return {"message": "Staff member updated successfully", "staff": staff.to_response()}


@router.delete("/{staff_id}")
async def delete_staff(
    staff_id: int,
    user_id: UserIdDep,
    repository: StaffRepositoryDep,
    task_repository: Annotated[SQLAlchemyTaskRepository, Depends(get_task_repository)]
):
    """Delete a staff member. Rejected with 409 while they are assigned to tasks."""
    use_case = DeleteStaffUseCase(repository, task_repository)
    unwrap(await use_case.execute(staff_id))
    return {"message": "Staff member deleted successfully"}
