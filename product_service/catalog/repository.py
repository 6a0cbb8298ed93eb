"""Product repository for database operations.

SQLAlchemy implementation of the `ProductStore` port. Every method
returns detached `ProductRecord` objects so callers never hold ORM
instances.
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from product_service.catalog.models import Product
from product_service.domain.entities import ProductRecord
from product_service.domain.state_machines import DeleteStatus

# Upper bound of the int4 code column
MAX_CODE = 2_147_483_647


def as_product_id(value: str) -> str | None:
    """Canonicalize an id for the UUID-keyed products table.

    Returns:
        The id in canonical UUID form, or None if it cannot name a row.
    """
    try:
        return str(UUID(value))
    except (ValueError, TypeError, AttributeError):
        return None


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            page = await repo.find_page(skip=0, take=20)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def count(self, include_deleted: bool = False) -> int:
        """Count products.

        Args:
            include_deleted: Whether soft-deleted products are counted.

        Returns:
            Count of matching products.
        """
        query = self._visible(select(func.count(Product.id)), include_deleted)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def find_page(
        self,
        skip: int,
        take: int,
        include_deleted: bool = False,
    ) -> list[ProductRecord]:
        """Find one page of products, newest first.

        Args:
            skip: Number of rows to skip.
            take: Maximum rows to return.
            include_deleted: Whether soft-deleted products are included.

        Returns:
            Products on the page.
        """
        query = (
            self._visible(select(Product), include_deleted)
            .order_by(Product.created_at.desc())
            .offset(skip)
            .limit(take)
        )
        result = await self.session.execute(query)
        return [product.to_record() for product in result.scalars().all()]

    async def find_by_id(
        self,
        product_id: str,
        include_deleted: bool = False,
    ) -> ProductRecord | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            include_deleted: Whether a soft-deleted product may match.

        Returns:
            Product if found, None otherwise.
        """
        product_id = as_product_id(product_id)
        if product_id is None:
            return None
        query = self._visible(
            select(Product).where(Product.id == product_id), include_deleted
        )
        result = await self.session.execute(query)
        product = result.scalar_one_or_none()
        return product.to_record() if product else None

    async def find_by_code(
        self,
        code: int,
        include_deleted: bool = False,
    ) -> ProductRecord | None:
        """Get product by code.

        Args:
            code: Product code.
            include_deleted: Whether a soft-deleted product may match.

        Returns:
            Product if found, None otherwise.
        """
        if not 1 <= code <= MAX_CODE:
            return None
        query = self._visible(
            select(Product).where(Product.code == code), include_deleted
        )
        result = await self.session.execute(query)
        product = result.scalar_one_or_none()
        return product.to_record() if product else None

    async def find_by_ids(self, product_ids: Sequence[str]) -> list[ProductRecord]:
        """Get all products whose id is in the given set.

        Soft-deleted products are included. Ids that are not UUIDs
        cannot match and are left out of the query.

        Args:
            product_ids: Product IDs.

        Returns:
            Matching products.
        """
        valid_ids = [
            product_id
            for product_id in map(as_product_id, product_ids)
            if product_id is not None
        ]
        if not valid_ids:
            return []
        query = select(Product).where(Product.id.in_(valid_ids))
        result = await self.session.execute(query)
        return [product.to_record() for product in result.scalars().all()]

    async def insert(self, values: dict[str, Any]) -> ProductRecord:
        """Insert a product.

        Args:
            values: Column values; id, code and created_at are assigned here.

        Returns:
            The stored product.
        """
        product = Product(**values)
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product.to_record()

    async def update_fields(
        self,
        product_id: str,
        values: dict[str, Any],
        expected_status: DeleteStatus | None = None,
    ) -> ProductRecord | None:
        """Update columns of one product in a single guarded statement.

        Args:
            product_id: Product ID.
            values: Column values to write.
            expected_status: If given, only update a product currently
                in this delete state.

        Returns:
            Updated product, or None if no row matched.
        """
        product_id = as_product_id(product_id)
        if product_id is None:
            return None

        statement = update(Product).where(Product.id == product_id)

        if expected_status is DeleteStatus.ACTIVE:
            statement = statement.where(Product.deleted_at.is_(None))
        elif expected_status is DeleteStatus.DELETED:
            statement = statement.where(Product.deleted_at.is_not(None))

        statement = (
            statement.values(**values)
            .returning(Product)
            .execution_options(synchronize_session=False, populate_existing=True)
        )

        result = await self.session.execute(statement)
        product = result.scalar_one_or_none()
        return product.to_record() if product else None

    def _visible(self, query: Select, include_deleted: bool) -> Select:
        """Apply the soft-delete visibility filter.

        Args:
            query: Query to filter.
            include_deleted: Whether soft-deleted products stay visible.

        Returns:
            Filtered query.
        """
        if include_deleted:
            return query
        return query.where(Product.deleted_at.is_(None))
