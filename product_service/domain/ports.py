"""Ports the catalog depends on.

The lifecycle service talks to persistence and to the identity service
only through these protocols. Concrete adapters live in
`product_service.catalog.repository` and
`product_service.infrastructure.identity_client`.
"""

from collections.abc import Sequence
from typing import Any, Protocol

from product_service.domain.entities import ProductRecord, UserSummary
from product_service.domain.state_machines import DeleteStatus


class ProductStore(Protocol):
    """Persistence operations over the product relation.

    `include_deleted=False` restricts every read to active records
    (deleted_at IS NULL); `True` ignores the soft-delete state.
    """

    async def count(self, include_deleted: bool = False) -> int:
        """Count products visible under the filter."""
        ...

    async def find_page(
        self,
        skip: int,
        take: int,
        include_deleted: bool = False,
    ) -> list[ProductRecord]:
        """Find one page of products, newest first."""
        ...

    async def find_by_id(
        self,
        product_id: str,
        include_deleted: bool = False,
    ) -> ProductRecord | None:
        """Find a product by id."""
        ...

    async def find_by_code(
        self,
        code: int,
        include_deleted: bool = False,
    ) -> ProductRecord | None:
        """Find a product by its numeric code."""
        ...

    async def find_by_ids(self, product_ids: Sequence[str]) -> list[ProductRecord]:
        """Find every product whose id is in the set, deleted or not."""
        ...

    async def insert(self, values: dict[str, Any]) -> ProductRecord:
        """Insert a product; the store assigns id, code and created_at."""
        ...

    async def update_fields(
        self,
        product_id: str,
        values: dict[str, Any],
        expected_status: DeleteStatus | None = None,
    ) -> ProductRecord | None:
        """Write fields to one product.

        When `expected_status` is given the write only applies if the
        product is currently in that delete state.

        Returns:
            The updated record, or None if no row matched.
        """
        ...


class UserDirectory(Protocol):
    """Batch lookup of user summaries in the identity service."""

    async def find_summaries(self, user_ids: Sequence[str]) -> list[UserSummary]:
        """Resolve user ids; unknown ids are simply absent from the result."""
        ...
