"""
Project mapper for converting between domain entities and database models.
"""

from buildtrack.domain.models.project import Project, ProjectStatus, ProjectPriority
from buildtrack.infrastructure.db.models import ProjectModel


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        """Convert Project domain entity to ProjectModel."""
        model = ProjectModel(id=project.id)
        self.update_model(model, project)
        return model

    def update_model(self, model: ProjectModel, project: Project) -> None:
        """Copy every persisted field of the entity onto an existing model."""
        model.name = project.name
        model.client = project.client
        model.location = project.location
        model.status = ProjectStatus(project.status)
        model.priority = ProjectPriority(project.priority)
        model.owner = project.owner
        model.description = project.description
        model.currency = project.currency
        model.budget = project.budget
        model.start_date = project.start_date
        model.deadline = project.deadline
        model.progress = project.progress
        model.created_at = project.created_at
        model.updated_at = project.updated_at

    def model_to_domain(self, model: ProjectModel) -> Project:
        """Convert ProjectModel to Project domain entity."""
        return Project(
            id=model.id,
            name=model.name,
            client=model.client or "",
            location=model.location or "",
            status=ProjectStatus(model.status) if model.status else ProjectStatus.PLANNING,
            priority=ProjectPriority(model.priority) if model.priority else ProjectPriority.MEDIUM,
            owner=model.owner or "Unassigned",
            description=model.description or "",
            currency=model.currency or "LKR",
            budget=model.budget or 0,
            start_date=model.start_date,
            deadline=model.deadline,
            progress=model.progress or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
