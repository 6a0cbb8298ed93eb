"""Tests for user reference enrichment."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from product_service.catalog.users import UserResolver
from product_service.domain.entities import ProductRecord, UserSummary
from product_service.domain.exceptions import RemoteDependencyError

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_record(product_id: str, **overrides) -> ProductRecord:
    values = {
        "id": product_id,
        "name": f"Product {product_id}",
        "price": Decimal("1.00000000"),
        "code": 1,
        "created_at": NOW,
        "created_by_id": "u1",
    }
    values.update(overrides)
    return ProductRecord(**values)


class TestUserResolver:
    """Tests for UserResolver."""

    @pytest.fixture
    def resolver(self, directory) -> UserResolver:
        """Create a resolver over the recording directory."""
        directory.users["u1"] = UserSummary(id="u1", name="Ann")
        directory.users["u2"] = UserSummary(id="u2", name="Ben")
        return UserResolver(directory)

    @pytest.mark.asyncio
    async def test_replaces_creator_id_with_summary(self, resolver, directory) -> None:
        """createdById u1 becomes createdBy {id: u1, name: Ann}."""
        [product] = await resolver.enrich([make_record("p1")])

        assert product.created_by == UserSummary(id="u1", name="Ann")
        assert product.created_by.to_dict() == {"id": "u1", "name": "Ann"}
        assert not hasattr(product, "created_by_id")
        assert directory.calls == [["u1"]]

    @pytest.mark.asyncio
    async def test_one_call_for_whole_batch(self, resolver, directory) -> None:
        """A page of records triggers a single lookup of distinct ids."""
        records = [
            make_record("p1"),
            make_record("p2", updated_by_id="u2"),
            make_record("p3", created_by_id="u2", deleted_at=NOW, deleted_by_id="u1"),
        ]

        enriched = await resolver.enrich(records)

        assert len(directory.calls) == 1
        assert directory.calls[0] == ["u1", "u2"]
        assert [p.id for p in enriched] == ["p1", "p2", "p3"]
        assert enriched[1].updated_by.name == "Ben"
        assert enriched[2].deleted_by.name == "Ann"

    @pytest.mark.asyncio
    async def test_unknown_user_becomes_none(self, resolver) -> None:
        """Ids missing from the response resolve to None."""
        [product] = await resolver.enrich([make_record("p1", updated_by_id="ghost")])

        assert product.created_by.id == "u1"
        assert product.updated_by is None
        assert product.deleted_by is None

    @pytest.mark.asyncio
    async def test_no_references_no_call(self, resolver, directory) -> None:
        """Records without user ids never reach the identity service."""
        [product] = await resolver.enrich([make_record("p1", created_by_id="")])

        assert directory.calls == []
        assert product.created_by is None

    @pytest.mark.asyncio
    async def test_empty_batch(self, resolver, directory) -> None:
        assert await resolver.enrich([]) == []
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_remote_failure_propagates_unchanged(self, resolver, directory) -> None:
        """The directory's exception reaches the caller as-is."""
        error = RemoteDependencyError("identity-service", "boom", 503)
        directory.error = error

        with pytest.raises(RemoteDependencyError) as exc_info:
            await resolver.enrich([make_record("p1")])

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_not_converted(self, resolver, directory) -> None:
        """Non-domain failures are not wrapped into another kind."""
        directory.error = RuntimeError("socket closed")

        with pytest.raises(RuntimeError, match="socket closed"):
            await resolver.enrich([make_record("p1")])
