"""
Staff domain model.
A member of the site workforce who can be assigned to tasks.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from buildtrack.domain.models.base import BaseEntity, ValidationError


STAFF_FIELDS = frozenset({"name", "email", "phone", "position", "department", "is_active", "user_id"})


@dataclass
class Staff(BaseEntity):
    """Staff entity."""

    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    is_active: bool = True
    user_id: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.email = (self.email or "").strip().lower()
        self.validate()

    def validate(self) -> None:
        """Validate staff state."""
        if not self.name or not self.name.strip():
            raise ValidationError("Staff name is required", "name")

        if not self.email:
            raise ValidationError("Email is required", "email")

        # Basic email validation
        if "@" not in self.email or "." not in self.email.split("@")[-1]:
            raise ValidationError(f"Invalid email format: {self.email}", "email")

    def update_info(self, changes: Dict[str, Any]) -> None:
        """Apply a partial update and re-validate."""
        unknown = set(changes) - STAFF_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            setattr(self, name, value)

        self.email = (self.email or "").strip().lower()
        self.validate()
        self.mark_as_updated()
