"""
Staff use cases for the application layer.
Implements business logic for the staff directory.
"""

from typing import List

from buildtrack.application.use_cases.base_use_case import (
    CreateUseCase, UpdateUseCase, DeleteUseCase, GetByIdUseCase, ListUseCase, QueryUseCase
)
from buildtrack.application.dto.base_dto import PaginationDTO
from buildtrack.application.dto.staff_dto import (
    CreateStaffRequestDTO, UpdateStaffRequestDTO, ListStaffRequestDTO,
    StaffResponseDTO, StaffListResponseDTO, AssigneeOptionDTO
)
from buildtrack.domain.models.base import EntityNotFoundError, BusinessRuleViolation, DuplicateEntityError
from buildtrack.domain.models.staff import Staff
from buildtrack.domain.repositories.staff_repository import StaffRepository
from buildtrack.domain.repositories.task_repository import TaskRepository


class CreateStaffUseCase(CreateUseCase[CreateStaffRequestDTO, StaffResponseDTO]):
    """Use case for registering a staff member."""

    def __init__(self, staff_repository: StaffRepository):
        super().__init__()
        self.staff_repository = staff_repository

    async def _execute_command_logic(self, request: CreateStaffRequestDTO) -> StaffResponseDTO:
        staff = Staff(
            name=request.name.strip(),
            email=request.email,
            phone=request.phone,
            position=request.position,
            department=request.department,
            is_active=request.is_active,
            user_id=request.user_id
        )

        if await self.staff_repository.find_by_email(staff.email):
            raise DuplicateEntityError("Staff", "email", staff.email)

        saved_staff = await self.staff_repository.save(staff)
        return StaffResponseDTO.from_domain(saved_staff)


class GetStaffUseCase(GetByIdUseCase[int, StaffResponseDTO]):
    """Use case for getting a staff member by ID."""

    def __init__(self, staff_repository: StaffRepository):
        super().__init__()
        self.staff_repository = staff_repository

    async def _execute_business_logic(self, staff_id: int) -> StaffResponseDTO:
        staff = await self.staff_repository.find_by_id(staff_id)
        if not staff:
            raise EntityNotFoundError("Staff", staff_id)
        return StaffResponseDTO.from_domain(staff)


class ListStaffUseCase(ListUseCase[ListStaffRequestDTO, StaffListResponseDTO]):
    """Use case for listing staff."""

    def __init__(
        self,
        staff_repository: StaffRepository,
        default_page_size: int = 10,
        max_page_size: int = 100
    ):
        super().__init__(default_page_size, max_page_size)
        self.staff_repository = staff_repository

    async def _execute_business_logic(self, request: ListStaffRequestDTO) -> StaffListResponseDTO:
        page = await self.staff_repository.find_page(
            search=request.search,
            department=request.department,
            is_active=request.is_active,
            page=request.page,
            page_size=self._page_size(request.page_size)
        )

        return StaffListResponseDTO(
            staff=[StaffResponseDTO.from_domain(staff) for staff in page.items],
            pagination=PaginationDTO.from_page(page)
        )


class ListAssigneeOptionsUseCase(QueryUseCase[None, List[AssigneeOptionDTO]]):
    """Use case for the active staff that can be assigned to tasks."""

    def __init__(self, staff_repository: StaffRepository):
        super().__init__()
        self.staff_repository = staff_repository

    async def _execute_business_logic(self, request: None) -> List[AssigneeOptionDTO]:
        return [AssigneeOptionDTO.from_domain(staff) for staff in await self.staff_repository.find_active()]


class UpdateStaffUseCase(UpdateUseCase[UpdateStaffRequestDTO, StaffResponseDTO]):
    """Use case for updating a staff member."""

    def __init__(self, staff_repository: StaffRepository):
        super().__init__()
        self.staff_repository = staff_repository

    async def _execute_command_logic(self, request: UpdateStaffRequestDTO) -> StaffResponseDTO:
        staff = await self.staff_repository.find_by_id(request.id)
        if not staff:
            raise EntityNotFoundError("Staff", request.id)

        staff.update_info(request.changes())

        saved_staff = await self.staff_repository.save(staff)
        return StaffResponseDTO.from_domain(saved_staff)


class DeleteStaffUseCase(DeleteUseCase[int, bool]):
    """Use case for deleting a staff member who is not assigned to any task."""

    def __init__(self, staff_repository: StaffRepository, task_repository: TaskRepository):
        super().__init__()
        self.staff_repository = staff_repository
        self.task_repository = task_repository

    async def _execute_command_logic(self, staff_id: int) -> bool:
        if not await self.staff_repository.find_by_id(staff_id):
            raise EntityNotFoundError("Staff", staff_id)

        assigned = await self.task_repository.count_by_assignee(staff_id)
        if assigned:
            raise BusinessRuleViolation(
                f"Cannot delete staff member assigned to {assigned} task(s); reassign them first"
            )

        return await self.staff_repository.delete(staff_id)
