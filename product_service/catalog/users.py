"""User reference enrichment.

Replaces the creator/updater/deleter ids on product records with user
summaries from the identity service, using one batched lookup per call
regardless of how many records are passed in.
"""

from collections.abc import Sequence

import structlog

from product_service.domain.entities import EnrichedProduct, ProductRecord, UserSummary
from product_service.domain.ports import UserDirectory

logger = structlog.get_logger()


class UserResolver:
    """Resolves user references on batches of product records."""

    def __init__(self, directory: UserDirectory) -> None:
        """Initialize resolver.

        Args:
            directory: Identity service lookup.
        """
        self.directory = directory

    async def enrich(self, records: Sequence[ProductRecord]) -> list[EnrichedProduct]:
        """Enrich a batch of records.

        Args:
            records: Records carrying raw user reference ids.

        Returns:
            Records with references replaced by summaries (or None when
            the identity service did not return the user).

        Raises:
            Exception: Whatever the directory raises, unchanged.
        """
        user_ids = list(dict.fromkeys(uid for record in records for uid in record.user_ids))

        users: dict[str, UserSummary] = {}
        if user_ids:
            try:
                summaries = await self.directory.find_summaries(user_ids)
            except Exception as e:
                logger.error(
                    "Failed to resolve user summaries",
                    user_ids=user_ids,
                    error=str(e),
                )
                raise
            users = {summary.id: summary for summary in summaries}

        return [self._substitute(record, users) for record in records]

    async def enrich_one(self, record: ProductRecord) -> EnrichedProduct:
        """Enrich a single record."""
        [enriched] = await self.enrich([record])
        return enriched

    @staticmethod
    def _substitute(
        record: ProductRecord,
        users: dict[str, UserSummary],
    ) -> EnrichedProduct:
        def lookup(user_id: str | None) -> UserSummary | None:
            return users.get(user_id) if user_id else None

        return EnrichedProduct(
            id=record.id,
            name=record.name,
            price=record.price,
            code=record.code,
            created_at=record.created_at,
            deleted_at=record.deleted_at,
            created_by=lookup(record.created_by_id),
            updated_by=lookup(record.updated_by_id),
            deleted_by=lookup(record.deleted_by_id),
        )
