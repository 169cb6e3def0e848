"""
Project domain model.
Represents a construction project that owns tasks.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum

from buildtrack.domain.models.base import BaseEntity, ValidationError


class ProjectStatus(str, Enum):
    """Project status."""
    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"


class ProjectPriority(str, Enum):
    """Project priority."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


PROJECT_FIELDS = frozenset({
    "name", "client", "location", "status", "priority", "owner", "description",
    "currency", "budget", "start_date", "deadline", "progress",
})


@dataclass
class Project(BaseEntity):
    """
    Project entity.
    Tasks reference a project; the project itself holds no task data.
    """

    name: str = ""
    client: str = ""
    location: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: ProjectPriority = ProjectPriority.MEDIUM
    owner: str = "Unassigned"
    description: str = ""
    currency: str = "LKR"
    budget: float = 0
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    progress: float = 0

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        """Validate project state."""
        if not self.name or not self.name.strip():
            raise ValidationError("Project name is required", "name")

        if self.budget < 0:
            raise ValidationError("Budget cannot be negative", "budget")

        if not 0 <= self.progress <= 100:
            raise ValidationError("Progress must be between 0 and 100", "progress")

        if self.start_date and self.deadline and self.deadline < self.start_date:
            raise ValidationError("Deadline cannot be before start date", "deadline")

    def update_info(self, changes: Dict[str, Any]) -> None:
        """Apply a partial update and re-validate."""
        unknown = set(changes) - PROJECT_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            setattr(self, name, value)

        self.validate()
        self.mark_as_updated()
