"""Tests for domain entities."""

from datetime import datetime, timezone
from decimal import Decimal

from product_service.domain.entities import (
    Actor,
    ProductDelta,
    ProductRecord,
    ProductSummary,
    UserSummary,
)
from product_service.domain.state_machines import DeleteStatus

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_record(**overrides) -> ProductRecord:
    values = {
        "id": "p1",
        "name": "Widget",
        "price": Decimal("9.99000000"),
        "code": 7,
        "created_at": NOW,
        "created_by_id": "u1",
    }
    values.update(overrides)
    return ProductRecord(**values)


class TestActor:
    """Tests for Actor."""

    def test_admin_role_grants_admin(self) -> None:
        assert Actor(id="a", roles=("admin",)).is_admin

    def test_other_roles_do_not(self) -> None:
        assert not Actor(id="a", roles=("user", "editor")).is_admin

    def test_admin_role_is_configurable(self) -> None:
        actor = Actor(id="a", roles=("superuser",), admin_role="superuser")
        assert actor.is_admin


class TestUserSummary:
    """Tests for UserSummary."""

    def test_round_trips_identity_attributes(self) -> None:
        """Attributes from the identity service come back unchanged."""
        data = {"id": "u1", "name": "Ann", "email": "ann@example.com"}
        assert UserSummary.from_api_response(data).to_dict() == data

    def test_minimal_summary(self) -> None:
        assert UserSummary.from_api_response({"id": "u1"}).to_dict() == {"id": "u1"}


class TestProductRecord:
    """Tests for ProductRecord."""

    def test_active_when_deleted_at_is_null(self) -> None:
        assert make_record().delete_status is DeleteStatus.ACTIVE

    def test_deleted_when_deleted_at_is_set(self) -> None:
        record = make_record(deleted_at=NOW, deleted_by_id="u2")
        assert record.delete_status is DeleteStatus.DELETED

    def test_user_ids_skip_nulls(self) -> None:
        assert make_record().user_ids == ["u1"]
        assert make_record(updated_by_id="u2", deleted_by_id="u3").user_ids == [
            "u1",
            "u2",
            "u3",
        ]

    def test_summary_projection(self) -> None:
        summary = ProductSummary.from_record(make_record(updated_by_id="u2"))
        assert summary == ProductSummary(
            id="p1", name="Widget", price=Decimal("9.99000000"), code=7, created_at=NOW
        )


class TestProductDelta:
    """Tests for ProductDelta."""

    def test_only_set_fields_are_changes(self) -> None:
        assert ProductDelta(id="p1", name="New").changes() == {"name": "New"}

    def test_empty_delta(self) -> None:
        assert ProductDelta(id="p1").changes() == {}

    def test_id_is_never_a_change(self) -> None:
        delta = ProductDelta(id="p1", name="New", price="2.5")
        assert delta.changes() == {"name": "New", "price": "2.5"}
