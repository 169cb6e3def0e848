"""
Project DTOs for the application layer.
Data Transfer Objects for project-related operations.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import Field

from buildtrack.domain.models.base import ValidationError
from buildtrack.domain.models.project import Project, ProjectStatus, ProjectPriority

from .base_dto import RequestDTO, ResponseDTO, ListRequestDTO, ListResponseDTO, UTCDateTime, to_domain_dict


class CreateProjectRequestDTO(RequestDTO):
    """DTO for project creation requests."""

    name: str = Field(min_length=1, max_length=255, description="Project name")
    client: str = Field(default="", max_length=255)
    location: str = Field(default="", max_length=255)
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING)
    priority: ProjectPriority = Field(default=ProjectPriority.MEDIUM)
    owner: str = Field(default="Unassigned", max_length=255)
    description: str = Field(default="", max_length=5000)
    currency: str = Field(default="LKR", min_length=3, max_length=3)
    budget: float = Field(default=0, ge=0)
    start_date: Optional[UTCDateTime] = None
    deadline: Optional[UTCDateTime] = None
    progress: float = Field(default=0, ge=0, le=100)


class UpdateProjectRequestDTO(RequestDTO):
    """DTO for project update requests; only fields present in the body are applied."""

    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    client: Optional[str] = Field(default=None, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    status: Optional[ProjectStatus] = None
    priority: Optional[ProjectPriority] = None
    owner: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    budget: Optional[float] = Field(default=None, ge=0)
    start_date: Optional[UTCDateTime] = None
    deadline: Optional[UTCDateTime] = None
    progress: Optional[float] = Field(default=None, ge=0, le=100)

    def changes(self) -> Dict[str, Any]:
        data = to_domain_dict(self)
        for name in ("name", "status", "priority", "budget", "progress", "currency"):
            if name in data and data[name] is None:
                raise ValidationError(f"{name} cannot be empty", name)
        return data


class ListProjectsRequestDTO(ListRequestDTO):
    """DTO for project list requests."""

    status: Optional[ProjectStatus] = None


class ProjectResponseDTO(ResponseDTO):
    """DTO for project responses."""

    name: str
    client: str
    location: str
    status: ProjectStatus
    priority: ProjectPriority
    owner: str
    description: str
    currency: str
    budget: float
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    progress: float

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponseDTO":
        return cls(
            id=project.id,
            name=project.name,
            client=project.client,
            location=project.location,
            status=project.status,
            priority=project.priority,
            owner=project.owner,
            description=project.description,
            currency=project.currency,
            budget=project.budget,
            start_date=project.start_date,
            deadline=project.deadline,
            progress=project.progress,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectListResponseDTO(ListResponseDTO):
    projects: List[ProjectResponseDTO]
