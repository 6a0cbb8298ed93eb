"""Shared fixtures for product service tests."""

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any
from uuid import uuid4

import pytest

from product_service.catalog.service import ProductService
from product_service.catalog.users import UserResolver
from product_service.domain.entities import Actor, ProductRecord, UserSummary
from product_service.domain.state_machines import DeleteStatus

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# Fakes
# ============================================================================


class InMemoryProductStore:
    """ProductStore kept in a dict.

    Records are copied on the way in and out so callers cannot mutate
    stored state. Each insert gets a creation time one second after the
    previous one, which keeps "newest first" ordering deterministic.
    """

    def __init__(self) -> None:
        self.products: dict[str, ProductRecord] = {}
        self.update_error: Exception | None = None
        self.update_calls: list[dict[str, Any]] = []
        self._next_code = 1

    def add(self, **values: Any) -> ProductRecord:
        """Seed a product synchronously."""
        code = self._next_code
        self._next_code += 1
        record = ProductRecord(
            id=values.pop("id", str(uuid4())),
            name=values.pop("name", f"Product {code}"),
            price=values.pop("price", Decimal("10.00000000")),
            code=code,
            created_at=values.pop("created_at", BASE_TIME + timedelta(seconds=code)),
            created_by_id=values.pop("created_by_id", "user-1"),
            **values,
        )
        self.products[record.id] = record
        return replace(record)

    def get(self, product_id: str) -> ProductRecord:
        """Read stored state directly."""
        return replace(self.products[product_id])

    async def count(self, include_deleted: bool = False) -> int:
        return len(self._visible(include_deleted))

    async def find_page(
        self,
        skip: int,
        take: int,
        include_deleted: bool = False,
    ) -> list[ProductRecord]:
        records = sorted(
            self._visible(include_deleted), key=lambda r: r.created_at, reverse=True
        )
        return [replace(r) for r in records[skip : skip + take]]

    async def find_by_id(
        self,
        product_id: str,
        include_deleted: bool = False,
    ) -> ProductRecord | None:
        return next(
            (replace(r) for r in self._visible(include_deleted) if r.id == product_id),
            None,
        )

    async def find_by_code(
        self,
        code: int,
        include_deleted: bool = False,
    ) -> ProductRecord | None:
        return next(
            (replace(r) for r in self._visible(include_deleted) if r.code == code),
            None,
        )

    async def find_by_ids(self, product_ids: Sequence[str]) -> list[ProductRecord]:
        return [replace(r) for r in self.products.values() if r.id in set(product_ids)]

    async def insert(self, values: dict[str, Any]) -> ProductRecord:
        return self.add(**values)

    async def update_fields(
        self,
        product_id: str,
        values: dict[str, Any],
        expected_status: DeleteStatus | None = None,
    ) -> ProductRecord | None:
        self.update_calls.append(
            {"product_id": product_id, "values": values, "expected_status": expected_status}
        )
        if self.update_error is not None:
            raise self.update_error

        record = self.products.get(product_id)
        if record is None:
            return None
        if expected_status is not None and record.delete_status is not expected_status:
            return None

        updated = replace(record, **values)
        self.products[product_id] = updated
        return replace(updated)

    def _visible(self, include_deleted: bool) -> list[ProductRecord]:
        return [
            r for r in self.products.values() if include_deleted or r.deleted_at is None
        ]


class RecordingUserDirectory:
    """UserDirectory that records every batch lookup."""

    def __init__(
        self,
        users: Sequence[UserSummary] = (),
        error: Exception | None = None,
    ) -> None:
        self.users = {user.id: user for user in users}
        self.error = error
        self.calls: list[list[str]] = []

    async def find_summaries(self, user_ids: Sequence[str]) -> list[UserSummary]:
        self.calls.append(list(user_ids))
        if self.error is not None:
            raise self.error
        return [self.users[uid] for uid in user_ids if uid in self.users]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def store() -> InMemoryProductStore:
    """Create an empty in-memory product store."""
    return InMemoryProductStore()


@pytest.fixture
def directory() -> RecordingUserDirectory:
    """Create a user directory knowing a user and an admin."""
    return RecordingUserDirectory(
        users=[
            UserSummary(id="user-1", name="Ann"),
            UserSummary(id="admin-1", name="Root", extra={"email": "root@example.com"}),
        ]
    )


@pytest.fixture
def service(
    store: InMemoryProductStore,
    directory: RecordingUserDirectory,
) -> ProductService:
    """Create a product service over the fakes."""
    return ProductService(store=store, resolver=UserResolver(directory))


@pytest.fixture
def user() -> Actor:
    """Create a regular actor."""
    return Actor(id="user-1", roles=("user",))


@pytest.fixture
def admin() -> Actor:
    """Create an admin actor."""
    return Actor(id="admin-1", roles=("user", "admin"))
