"""
Staff mapper for converting between domain entities and database models.
"""

from buildtrack.domain.models.staff import Staff
from buildtrack.infrastructure.db.models import StaffModel


class StaffMapper:
    """Maps between Staff domain entity and StaffModel database model."""

    def domain_to_model(self, staff: Staff) -> StaffModel:
        model = StaffModel(id=staff.id)
        self.update_model(model, staff)
        return model

    def update_model(self, model: StaffModel, staff: Staff) -> None:
        model.name = staff.name
        model.email = staff.email
        model.phone = staff.phone
        model.position = staff.position
        model.department = staff.department
        model.is_active = staff.is_active
        model.user_id = staff.user_id
        model.created_at = staff.created_at
        model.updated_at = staff.updated_at

    def model_to_domain(self, model: StaffModel) -> Staff:
        return Staff(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            position=model.position,
            department=model.department,
            is_active=bool(model.is_active),
            user_id=model.user_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
