"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

MAX_PAGE_SIZE = 100

# Largest offset a SQL backend can bind (signed 64-bit)
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    """
    Offset-based pagination request.

    Pages are zero-based. When no sort key is given, results are ordered
    by id.
    """

    page: int = 0
    """Zero-based page index"""

    size: int = 10
    """Number of items per page (1-100)"""

    sort: Optional[str] = None
    """Optional attribute name to order by"""

    direction: str = "asc"
    """Sort direction: 'asc' or 'desc'"""

    def __post_init__(self) -> None:
        """Validate pagination constraints."""
        if self.page < 0:
            raise ValueError(f"page must be >= 0, got {self.page}")

        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

        if self.size > MAX_PAGE_SIZE:
            raise ValueError(f"size cannot exceed {MAX_PAGE_SIZE}, got {self.size}")

        if self.direction not in ("asc", "desc"):
            raise ValueError(
                f"direction must be 'asc' or 'desc', got '{self.direction}'"
            )

        if self.page * self.size > MAX_OFFSET:
            raise ValueError(f"page {self.page} is out of range for size {self.size}")

    @property
    def offset(self) -> int:
        """Number of items skipped before this page."""
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One slice of a larger result set.

    Totals always describe the filtered result set the page was cut from,
    not the whole table.
    """

    content: List[T]
    """Items on this page"""

    number: int
    """Zero-based page index"""

    size: int
    """Requested page size"""

    total_elements: int
    """Number of items across all pages"""

    sort: Optional[str] = field(default=None)
    """Sort key the page was ordered by, if any"""

    @property
    def total_pages(self) -> int:
        """Number of pages needed to hold every element."""
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Return a new page with ``fn`` applied to every item."""
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
            sort=self.sort,
        )
