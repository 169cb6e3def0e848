"""
Staff repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Iterable
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_

from buildtrack.domain.models.staff import Staff
from buildtrack.domain.repositories.base import Page
from buildtrack.config import settings
from buildtrack.infrastructure.pagination import OffsetPagination
from buildtrack.domain.repositories.staff_repository import StaffRepository
from buildtrack.domain.models.base import EntityNotFoundError, DuplicateEntityError
from buildtrack.infrastructure.db.models import StaffModel
from buildtrack.infrastructure.mappers.staff_mapper import StaffMapper


class SQLAlchemyStaffRepository(StaffRepository):
    """SQLAlchemy implementation of staff repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = StaffMapper()
        self.paginator = OffsetPagination(max_page_size=settings.max_page_size)

    async def save(self, staff: Staff) -> Staff:
        """Save a staff entity."""
        # Check for duplicate email
        existing = self.session.query(StaffModel).filter_by(email=staff.email).first()
        if existing and existing.id != staff.id:
            raise DuplicateEntityError("Staff", "email", staff.email)

        if staff.is_new:
            model = self.mapper.domain_to_model(staff)
            self.session.add(model)
        else:
            model = self.session.query(StaffModel).filter_by(id=staff.id).first()
            if not model:
                raise EntityNotFoundError("Staff", staff.id)
            self.mapper.update_model(model, staff)

        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError("Staff", "email", staff.email)

        if staff.is_new:
            staff.id = model.id
        return staff

    async def find_by_id(self, staff_id: int) -> Optional[Staff]:
        """Get staff member by ID."""
        model = self.session.query(StaffModel).filter_by(id=staff_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    async def find_by_ids(self, staff_ids: Iterable[int]) -> List[Staff]:
        """Get every staff member among the given IDs in one query."""
        staff_ids = list(staff_ids)
        if not staff_ids:
            return []

        models = self.session.query(StaffModel).filter(StaffModel.id.in_(staff_ids)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_by_email(self, email: str) -> Optional[Staff]:
        model = self.session.query(StaffModel).filter_by(email=email.strip().lower()).first()
        return self.mapper.model_to_domain(model) if model else None

    async def find_page(
        self,
        search: Optional[str] = None,
        department: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Page[Staff]:
        """Get staff ordered by name."""
        query = self.session.query(StaffModel)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                StaffModel.name.ilike(pattern),
                StaffModel.email.ilike(pattern),
                StaffModel.position.ilike(pattern),
            ))
        if department:
            query = query.filter(StaffModel.department == department)
        if is_active is not None:
            query = query.filter(StaffModel.is_active == is_active)

        query = query.order_by(StaffModel.name.asc(), StaffModel.id.asc())
        return self.paginator.paginate(query, page, page_size, self.mapper.model_to_domain)

    async def find_active(self) -> List[Staff]:
        """Get active staff ordered by name."""
        models = self.session.query(StaffModel).filter(
            StaffModel.is_active.is_(True)
        ).order_by(StaffModel.name.asc()).all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def delete(self, staff_id: int) -> bool:
        """Delete staff member by ID."""
        model = self.session.query(StaffModel).filter_by(id=staff_id).first()

        if not model:
            return False

        self.session.delete(model)
        self.session.commit()
        return True
