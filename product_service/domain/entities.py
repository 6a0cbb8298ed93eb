"""Domain entities and data transfer objects for the product catalog.

Plain dataclasses shared by the store port, the lifecycle service and
the user resolver. None of them know about SQLAlchemy or HTTP.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from product_service.domain.state_machines import DeleteStatus


class Role(str, Enum):
    """Roles understood by the catalog."""

    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """Caller identity attached to every RPC payload.

    Attributes:
        id: Identity-service user id.
        roles: Role names held by the caller.
        admin_role: Role name that grants the admin capability.
    """

    id: str
    roles: tuple[str, ...] = ()
    admin_role: str = Role.ADMIN.value

    @property
    def is_admin(self) -> bool:
        """Check whether the actor may see soft-deleted records."""
        return self.admin_role in self.roles


@dataclass(frozen=True)
class UserSummary:
    """User summary owned by the identity service.

    Only `id` and `name` are interpreted; any other display attributes
    the identity service returns are carried in `extra` untouched.
    """

    id: str
    name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Self:
        """Create from identity service response data."""
        return cls(
            id=str(data["id"]),
            name=data.get("name"),
            extra={k: v for k, v in data.items() if k not in ("id", "name")},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary with the attributes the identity service sent.
        """
        data: dict[str, Any] = {"id": self.id}
        if self.name is not None:
            data["name"] = self.name
        data.update(self.extra)
        return data


@dataclass
class ProductRecord:
    """Product as stored, with raw user reference ids."""

    id: str
    name: str
    price: Decimal
    code: int
    created_at: datetime
    created_by_id: str
    updated_by_id: str | None = None
    deleted_at: datetime | None = None
    deleted_by_id: str | None = None

    @property
    def delete_status(self) -> DeleteStatus:
        """Current soft-delete state."""
        return DeleteStatus.DELETED if self.deleted_at is not None else DeleteStatus.ACTIVE

    @property
    def user_ids(self) -> list[str]:
        """Non-null user references, creator first."""
        return [
            user_id
            for user_id in (self.created_by_id, self.updated_by_id, self.deleted_by_id)
            if user_id
        ]


@dataclass
class EnrichedProduct:
    """Product with user references resolved to summaries."""

    id: str
    name: str
    price: Decimal
    code: int
    created_at: datetime
    deleted_at: datetime | None = None
    created_by: UserSummary | None = None
    updated_by: UserSummary | None = None
    deleted_by: UserSummary | None = None


@dataclass
class ProductSummary:
    """Unenriched product projection used by summary lookups."""

    id: str
    name: str
    price: Decimal
    code: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: ProductRecord) -> Self:
        """Project a stored record."""
        return cls(
            id=record.id,
            name=record.name,
            price=record.price,
            code=record.code,
            created_at=record.created_at,
        )


@dataclass
class ProductReference:
    """Minimal projection returned by batch validation."""

    id: str
    name: str
    code: int


@dataclass
class ProductDraft:
    """Input for creating a product. Price is validated by the service."""

    name: str
    price: Any


@dataclass
class ProductDelta:
    """Sparse update for a product.

    Only the updatable fields appear here; None means "leave unchanged".
    """

    id: str
    name: str | None = None
    price: Any = None

    def changes(self) -> dict[str, Any]:
        """Fields to write, keyed by column name."""
        return {
            key: value
            for key, value in (("name", self.name), ("price", self.price))
            if value is not None
        }
