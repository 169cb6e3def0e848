"""
Staff repository interface.
Defines the contract for staff directory persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Iterable

from buildtrack.domain.models.staff import Staff
from buildtrack.domain.repositories.base import Page


class StaffRepository(ABC):
    """
    Repository interface for Staff entity.
    """

    @abstractmethod
    async def save(self, staff: Staff) -> Staff:
        """
        Save a staff entity.
        Raises DuplicateEntityError if the email belongs to another staff member.
        """
        pass

    @abstractmethod
    async def find_by_id(self, staff_id: int) -> Optional[Staff]:
        """
        Find a staff member by ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def find_by_ids(self, staff_ids: Iterable[int]) -> List[Staff]:
        """
        Resolve a batch of identifiers in a single lookup.
        Identifiers that do not exist are simply absent from the result.
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Staff]:
        """
        Find a staff member by email address.
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        search: Optional[str] = None,
        department: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Page[Staff]:
        """
        Find staff ordered by name, optionally filtered.
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[Staff]:
        """
        Find all active staff ordered by name, for assignee pickers.
        """
        pass

    @abstractmethod
    async def delete(self, staff_id: int) -> bool:
        """
        Delete a staff member by ID.
        Returns True if deleted, False if not found.
        """
        pass
