"""Catalog service for product lifecycle operations.

Combines the product store, the pagination policy and the user resolver
into the operations exposed over RPC. Visibility rule: actors with the
admin capability see every product; everyone else sees only products
whose deleted_at is null.
"""

from collections.abc import Sequence
from datetime import datetime, timezone

import structlog

from product_service.catalog.pagination import PaginatedResult, PaginationParams, page_meta
from product_service.catalog.users import UserResolver
from product_service.domain.entities import (
    Actor,
    EnrichedProduct,
    ProductDelta,
    ProductDraft,
    ProductRecord,
    ProductReference,
    ProductSummary,
)
from product_service.domain.exceptions import (
    DomainError,
    InternalError,
    ProductAlreadyDeletedError,
    ProductBatchMismatchError,
    ProductNotDeletedError,
    ProductNotFoundError,
)
from product_service.domain.ports import ProductStore
from product_service.domain.state_machines import DeleteStatus, validate_delete_transition
from product_service.domain.value_objects import DEFAULT_PRICE_SCALE, Price

logger = structlog.get_logger()


class ProductService:
    """Service for product lifecycle operations.

    Example usage:
        service = ProductService(ProductRepository(session), UserResolver(client))
        product = await service.find_one(product_id, actor)
    """

    def __init__(
        self,
        store: ProductStore,
        resolver: UserResolver,
        price_scale: int = DEFAULT_PRICE_SCALE,
    ) -> None:
        """Initialize service.

        Args:
            store: Product persistence.
            resolver: User reference enrichment.
            price_scale: Maximum fractional digits accepted in prices.
        """
        self.store = store
        self.resolver = resolver
        self.price_scale = price_scale

    # ========================================================================
    # Create
    # ========================================================================

    async def create(self, draft: ProductDraft, actor: Actor) -> EnrichedProduct:
        """Create a product owned by the actor.

        Args:
            draft: Name and raw price.
            actor: Caller.

        Returns:
            The enriched product.

        Raises:
            InvalidPriceError: If the price is not a positive decimal
                of the allowed scale.
        """
        price = Price.parse(draft.price, self.price_scale)

        record = await self.store.insert(
            {"name": draft.name, "price": price.amount, "created_by_id": actor.id}
        )

        logger.info(
            "Product created",
            product_id=record.id,
            code=record.code,
            actor_id=actor.id,
        )

        return await self.resolver.enrich_one(record)

    # ========================================================================
    # Read
    # ========================================================================

    async def find_all(
        self,
        pagination: PaginationParams,
        actor: Actor,
    ) -> PaginatedResult[EnrichedProduct]:
        """List products visible to the actor, newest first, enriched."""
        total, records = await self._find_page(pagination, actor)
        data = await self.resolver.enrich(records)
        return PaginatedResult(meta=page_meta(pagination, total), data=data)

    async def find_all_summary(
        self,
        pagination: PaginationParams,
        actor: Actor,
    ) -> PaginatedResult[ProductSummary]:
        """List products visible to the actor, newest first, unenriched."""
        total, records = await self._find_page(pagination, actor)
        data = [ProductSummary.from_record(record) for record in records]
        return PaginatedResult(meta=page_meta(pagination, total), data=data)

    async def find_one(self, product_id: str, actor: Actor) -> EnrichedProduct:
        """Get a product by id.

        Raises:
            ProductNotFoundError: If no product is visible under that id.
        """
        record = await self._find_visible(product_id, actor)
        return await self.resolver.enrich_one(record)

    async def find_one_by_code(self, code: int, actor: Actor) -> EnrichedProduct:
        """Get a product by code.

        Raises:
            ProductNotFoundError: If no product is visible under that code.
        """
        record = await self.store.find_by_code(code, include_deleted=actor.is_admin)
        if record is None:
            raise ProductNotFoundError(code, field="code")
        return await self.resolver.enrich_one(record)

    async def find_one_summary(self, product_id: str, actor: Actor) -> ProductSummary:
        """Get a product summary by id, without enrichment.

        Raises:
            ProductNotFoundError: If no product is visible under that id.
        """
        record = await self._find_visible(product_id, actor)
        return ProductSummary.from_record(record)

    async def validate_batch(self, product_ids: Sequence[str]) -> list[ProductReference]:
        """Check that every id names an existing product.

        Soft-deleted products count as existing.

        Args:
            product_ids: Requested ids, duplicates allowed.

        Returns:
            One reference per distinct id.

        Raises:
            ProductBatchMismatchError: If any id does not resolve.
        """
        unique_ids = list(dict.fromkeys(product_ids))
        records = await self.store.find_by_ids(unique_ids)

        if len(records) != len(unique_ids):
            raise ProductBatchMismatchError(list(product_ids))

        return [
            ProductReference(id=record.id, name=record.name, code=record.code)
            for record in records
        ]

    # ========================================================================
    # Update
    # ========================================================================

    async def update(self, delta: ProductDelta, actor: Actor) -> EnrichedProduct:
        """Apply a sparse update.

        The target must be visible to the actor; an admin may edit a
        soft-deleted product.

        Raises:
            ProductNotFoundError: If the product is not visible.
            InvalidPriceError: If a new price is invalid.
        """
        await self.find_one_summary(delta.id, actor)

        values = delta.changes()
        if "price" in values:
            values["price"] = Price.parse(values["price"], self.price_scale).amount
        values["updated_by_id"] = actor.id

        record = await self.store.update_fields(
            delta.id,
            values,
            expected_status=None if actor.is_admin else DeleteStatus.ACTIVE,
        )
        if record is None:
            raise ProductNotFoundError(delta.id)

        logger.info(
            "Product updated",
            product_id=record.id,
            fields=sorted(values),
            actor_id=actor.id,
        )

        return await self.resolver.enrich_one(record)

    # ========================================================================
    # Soft Delete Lifecycle
    # ========================================================================

    async def remove(self, product_id: str, actor: Actor) -> EnrichedProduct:
        """Soft-delete a product.

        Raises:
            ProductNotFoundError: If the product is not visible.
            ProductAlreadyDeletedError: If it is already deleted.
            InternalError: If the write fails unexpectedly.
        """
        current = await self._find_visible(product_id, actor)
        validate_delete_transition(product_id, current.delete_status, DeleteStatus.DELETED)

        record = await self._write_transition(
            product_id,
            {"deleted_at": datetime.now(timezone.utc), "deleted_by_id": actor.id},
            expected_status=DeleteStatus.ACTIVE,
            failure_message="Failed to delete product",
        )
        if record is None:
            raise ProductAlreadyDeletedError(product_id)

        logger.info("Product deleted", product_id=product_id, actor_id=actor.id)

        return await self.resolver.enrich_one(record)

    async def restore(self, product_id: str, actor: Actor) -> EnrichedProduct:
        """Restore a soft-deleted product.

        Raises:
            ProductNotFoundError: If the product is not visible.
            ProductNotDeletedError: If it is not deleted.
            InternalError: If the write fails unexpectedly.
        """
        current = await self._find_visible(product_id, actor)
        validate_delete_transition(product_id, current.delete_status, DeleteStatus.ACTIVE)

        record = await self._write_transition(
            product_id,
            {"deleted_at": None, "deleted_by_id": None, "updated_by_id": actor.id},
            expected_status=DeleteStatus.DELETED,
            failure_message="Failed to restore product",
        )
        if record is None:
            raise ProductNotDeletedError(product_id)

        logger.info("Product restored", product_id=product_id, actor_id=actor.id)

        return await self.resolver.enrich_one(record)

    # ========================================================================
    # Helpers
    # ========================================================================

    async def _find_visible(self, product_id: str, actor: Actor) -> ProductRecord:
        record = await self.store.find_by_id(product_id, include_deleted=actor.is_admin)
        if record is None:
            raise ProductNotFoundError(product_id)
        return record

    async def _find_page(
        self,
        pagination: PaginationParams,
        actor: Actor,
    ) -> tuple[int, list[ProductRecord]]:
        total = await self.store.count(include_deleted=actor.is_admin)
        records = await self.store.find_page(
            skip=pagination.skip,
            take=pagination.limit,
            include_deleted=actor.is_admin,
        )
        return total, records

    async def _write_transition(
        self,
        product_id: str,
        values: dict,
        expected_status: DeleteStatus,
        failure_message: str,
    ) -> ProductRecord | None:
        """Run a guarded delete-state write.

        Domain errors pass through; anything else is logged and
        reported as InternalError.
        """
        try:
            return await self.store.update_fields(
                product_id, values, expected_status=expected_status
            )
        except DomainError:
            raise
        except Exception as e:
            logger.exception(
                failure_message,
                product_id=product_id,
                error=str(e),
            )
            raise InternalError(failure_message, details={"product_id": product_id}) from e
