"""Tests for the pagination policy."""

import pytest

from product_service.catalog.pagination import (
    PageMeta,
    PaginationParams,
    last_page,
    page_meta,
)


class TestPaginationParams:
    """Tests for PaginationParams."""

    def test_first_page_skips_nothing(self) -> None:
        assert PaginationParams(page=1, limit=10).skip == 0

    @pytest.mark.parametrize(
        ("page", "limit", "skip"),
        [(2, 10, 10), (3, 25, 50), (7, 1, 6)],
    )
    def test_skip(self, page: int, limit: int, skip: int) -> None:
        """Skip is (page - 1) * limit."""
        assert PaginationParams(page=page, limit=limit).skip == skip


class TestLastPage:
    """Tests for last page computation."""

    def test_empty_set_has_no_pages(self) -> None:
        assert last_page(0, 10) == 0

    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(1, 10, 1), (10, 10, 1), (11, 10, 2), (99, 1, 99), (101, 25, 5)],
    )
    def test_rounds_up(self, total: int, limit: int, expected: int) -> None:
        """Last page is ceil(total / limit)."""
        assert last_page(total, limit) == expected


def test_page_meta() -> None:
    """Metadata echoes page and total alongside the last page."""
    meta = page_meta(PaginationParams(page=2, limit=5), total=12)
    assert meta == PageMeta(total=12, page=2, last_page=3)
