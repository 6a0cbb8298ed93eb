"""SQLAlchemy models for product catalog.

Defines the products table for persistent storage.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, Identity, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from product_service.domain.entities import ProductRecord
from product_service.domain.value_objects import DEFAULT_PRICE_SCALE, PRICE_PRECISION
from product_service.infrastructure.database import Base


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        name: Product name.
        price: Price with 8 fractional digits.
        code: Store-assigned numeric code, used as an alternate key.
        created_at: Creation timestamp.
        created_by_id: User that created the product.
        updated_by_id: User that last updated or restored the product.
        deleted_at: Soft-delete timestamp, null while active.
        deleted_by_id: User that soft-deleted the product.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(PRICE_PRECISION, DEFAULT_PRICE_SCALE),
        nullable=False,
    )
    code: Mapped[int] = mapped_column(
        Integer,
        Identity(always=False),
        nullable=False,
        unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    created_by_id: Mapped[str] = mapped_column(String(100), nullable=False)
    updated_by_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    deleted_by_id: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # deleted_at and deleted_by_id are set and cleared together
    __table_args__ = (
        CheckConstraint(
            "(deleted_at IS NULL) = (deleted_by_id IS NULL)",
            name="ck_products_delete_pair",
        ),
        CheckConstraint("price > 0", name="ck_products_price_positive"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, code={self.code}, name={self.name[:30]}...)>"

    def to_record(self) -> ProductRecord:
        """Convert to a domain record.

        Returns:
            ProductRecord detached from the session.
        """
        return ProductRecord(
            id=self.id,
            name=self.name,
            price=self.price,
            code=self.code,
            created_at=self.created_at,
            created_by_id=self.created_by_id,
            updated_by_id=self.updated_by_id,
            deleted_at=self.deleted_at,
            deleted_by_id=self.deleted_by_id,
        )
