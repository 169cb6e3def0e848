"""
Offset pagination for SQLAlchemy queries.
"""

from typing import Any, Callable, Optional, TypeVar
from sqlalchemy.orm import Query

from buildtrack.domain.repositories.base import Page

T = TypeVar('T')


class OffsetPagination:
    """
    Offset-based pagination returning a domain Page with the total count.
    """

    def __init__(self, default_page_size: int = 10, max_page_size: int = 100):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def paginate(
        self,
        query: Query,
        page: int = 1,
        page_size: Optional[int] = None,
        convert: Callable[[Any], T] = lambda row: row
    ) -> Page[T]:
        """
        Paginate an ordered query.

        Args:
            query: SQLAlchemy query to paginate, already ordered
            page: Page number (1-based)
            page_size: Number of items per page
            convert: Maps each row to the returned item type

        Returns:
            Page holding the converted items and the total count
        """
        # Validate and set page size
        if page_size is None:
            page_size = self.default_page_size
        page_size = max(1, min(page_size, self.max_page_size))

        # Validate page number
        page = max(1, page)

        # Count without ordering
        total_items = query.order_by(None).count()

        rows = query.offset((page - 1) * page_size).limit(page_size).all()

        return Page(
            items=[convert(row) for row in rows],
            total=total_items,
            page=page,
            page_size=page_size,
        )
