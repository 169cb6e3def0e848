"""
Staff DTOs for the application layer.
"""

from typing import Optional, List, Dict, Any
from pydantic import Field

from buildtrack.domain.models.base import ValidationError
from buildtrack.domain.models.staff import Staff

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ListRequestDTO, ListResponseDTO, to_domain_dict


class CreateStaffRequestDTO(RequestDTO):
    """DTO for staff creation requests."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    position: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True
    user_id: Optional[str] = Field(default=None, max_length=255)


class UpdateStaffRequestDTO(RequestDTO):
    """DTO for staff update requests; only fields present in the body are applied."""

    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    position: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None
    user_id: Optional[str] = Field(default=None, max_length=255)

    def changes(self) -> Dict[str, Any]:
        data = to_domain_dict(self)
        for name in ("name", "email", "is_active"):
            if name in data and data[name] is None:
                raise ValidationError(f"{name} cannot be empty", name)
        return data


class ListStaffRequestDTO(ListRequestDTO):
    """DTO for staff list requests."""

    department: Optional[str] = None
    is_active: Optional[bool] = None


class StaffResponseDTO(ResponseDTO):
    """DTO for staff responses."""

    name: str
    email: str
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    is_active: bool
    user_id: Optional[str] = None

    @classmethod
    def from_domain(cls, staff: Staff) -> "StaffResponseDTO":
        return cls(
            id=staff.id,
            name=staff.name,
            email=staff.email,
            phone=staff.phone,
            position=staff.position,
            department=staff.department,
            is_active=staff.is_active,
            user_id=staff.user_id,
            created_at=staff.created_at,
            updated_at=staff.updated_at,
        )


class AssigneeOptionDTO(BaseDTO):
    """Compact staff entry for assignee pickers."""

    id: int
    name: str
    position: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def from_domain(cls, staff: Staff) -> "AssigneeOptionDTO":
        return cls(id=staff.id, name=staff.name, position=staff.position, department=staff.department)


class StaffListResponseDTO(ListResponseDTO):
    staff: List[StaffResponseDTO]
