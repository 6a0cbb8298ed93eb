"""Pagination policy for catalog listings.

Pure arithmetic over (page, limit, total); no I/O.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
    """

    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class PageMeta:
    """Pagination metadata returned next to a page of records.

    Attributes:
        total: Total number of visible records.
        page: Current page.
        last_page: Number of the last page (0 when there are no records).
    """

    total: int
    page: int
    last_page: int


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container."""

    meta: PageMeta
    data: list[T]


def last_page(total: int, limit: int) -> int:
    """Number of pages needed for `total` records.

    Args:
        total: Total record count.
        limit: Items per page.

    Returns:
        ceil(total / limit), which is 0 for an empty set.
    """
    return (total + limit - 1) // limit


def page_meta(pagination: PaginationParams, total: int) -> PageMeta:
    """Build metadata for a page.

    Args:
        pagination: Requested page and limit.
        total: Total visible records from a prior count.

    Returns:
        Page metadata.
    """
    return PageMeta(
        total=total,
        page=pagination.page,
        last_page=last_page(total, pagination.limit),
    )
