"""
Project repository interface.
Defines the contract for project data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from buildtrack.domain.models.project import Project, ProjectStatus
from buildtrack.domain.repositories.base import Page


class ProjectRepository(ABC):
    """
    Repository interface for Project entity.
    """

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """
        Save a project entity.
        Returns the saved project with its identifier and timestamps.
        """
        pass

    @abstractmethod
    async def find_by_id(self, project_id: int) -> Optional[Project]:
        """
        Find a project by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def exists(self, project_id: int) -> bool:
        """
        Check if a project exists by ID.
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        search: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Page[Project]:
        """
        Find projects, newest first, optionally filtered by name and status.
        """
        pass

    @abstractmethod
    async def delete(self, project_id: int) -> bool:
        """
        Delete a project by ID.
        Returns True if deleted, False if not found.
        """
        pass
