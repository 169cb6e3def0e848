"""
Project repository implementation using SQLAlchemy.
"""

from typing import Optional
from sqlalchemy.orm import Session

from buildtrack.domain.models.project import Project, ProjectStatus
from buildtrack.domain.repositories.base import Page
from buildtrack.config import settings
from buildtrack.infrastructure.pagination import OffsetPagination
from buildtrack.domain.repositories.project_repository import ProjectRepository as ProjectRepositoryInterface
from buildtrack.domain.models.base import EntityNotFoundError
from buildtrack.infrastructure.db.models import ProjectModel
from buildtrack.infrastructure.mappers.project_mapper import ProjectMapper


class SQLAlchemyProjectRepository(ProjectRepositoryInterface):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()
        self.paginator = OffsetPagination(max_page_size=settings.max_page_size)

    async def save(self, project: Project) -> Project:
        """Save a project entity."""
        if project.is_new:
            # Create new project
            model = self.mapper.domain_to_model(project)
            self.session.add(model)
        else:
            # Update existing project
            model = self.session.query(ProjectModel).filter_by(
                id=project.id
            ).first()
            if not model:
                raise EntityNotFoundError("Project", project.id)
            self.mapper.update_model(model, project)

        self.session.commit()
        # Return updated project with ID
        if project.is_new:
            project.id = model.id
        return project

    async def find_by_id(self, project_id: int) -> Optional[Project]:
        """Get project by ID."""
        model = self.session.query(ProjectModel).filter_by(id=project_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    async def exists(self, project_id: int) -> bool:
        return self.session.query(
            self.session.query(ProjectModel).filter_by(id=project_id).exists()
        ).scalar()

    async def find_page(
        self,
        search: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Page[Project]:
        """Get projects, newest first."""
        query = self.session.query(ProjectModel)

        if search:
            query = query.filter(ProjectModel.name.ilike(f"%{search}%"))
        if status is not None:
            query = query.filter(ProjectModel.status == status)

        query = query.order_by(ProjectModel.created_at.desc(), ProjectModel.id.desc())
        return self.paginator.paginate(query, page, page_size, self.mapper.model_to_domain)

    async def delete(self, project_id: int) -> bool:
        """Delete project by ID."""
        model = self.session.query(ProjectModel).filter_by(id=project_id).first()

        if not model:
            return False

        self.session.delete(model)
        self.session.commit()
        return True
