"""
Shared query types for repository interfaces.
"""

from dataclasses import dataclass, field
from math import ceil
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a paginated query."""

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every matching item."""
        if self.page_size <= 0:
            return 0
        return ceil(self.total / self.page_size)

