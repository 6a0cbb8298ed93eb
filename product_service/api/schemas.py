"""API schemas for the product catalog RPC surface.

Pydantic models for request/response validation and serialization.
JSON keys are camelCase on the wire; Python attributes stay snake_case.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from product_service.catalog.pagination import PageMeta, PaginatedResult, PaginationParams
from product_service.domain.entities import (
    Actor,
    EnrichedProduct,
    ProductDelta,
    ProductDraft,
    ProductReference,
    ProductSummary,
)
from product_service.infrastructure.config import settings

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All RPC errors follow this format for consistency.
    """

    status: int = Field(..., description="HTTP-style status code")
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class ActorSchema(CamelModel):
    """Caller identity."""

    id: str = Field(..., min_length=1, description="Identity-service user id")
    roles: list[str] = Field(default_factory=list, description="Role names")

    def to_actor(self) -> Actor:
        """Convert to domain actor."""
        return Actor(id=self.id, roles=tuple(self.roles), admin_role=settings.admin_role)


class PaginationSchema(CamelModel):
    """Pagination parameters."""

    page: int = Field(default=1, ge=1, description="Page number (1-based)")
    limit: int = Field(default=10, ge=1, le=100, description="Items per page")

    def to_params(self) -> PaginationParams:
        """Convert to pagination params."""
        return PaginationParams(page=self.page, limit=self.limit)


class PageMetaSchema(CamelModel):
    """Pagination metadata."""

    total: int
    page: int
    last_page: int

    @classmethod
    def from_meta(cls, meta: PageMeta) -> "PageMetaSchema":
        """Create from pagination metadata."""
        return cls(total=meta.total, page=meta.page, last_page=meta.last_page)


# ============================================================================
# Request Payloads
# ============================================================================


class ActorPayload(CamelModel):
    """Payload part shared by every actor-scoped message."""

    actor: ActorSchema = Field(..., validation_alias=AliasChoices("actor", "user"))


class ProductCreateInput(CamelModel):
    """Fields for a new product."""

    name: str = Field(..., min_length=3, max_length=255)
    price: Decimal = Field(..., description="Positive decimal, up to 8 fractional digits")

    def to_draft(self) -> ProductDraft:
        """Convert to domain draft."""
        return ProductDraft(name=self.name, price=self.price)


class CreateProductPayload(ActorPayload):
    """Payload of product.create."""

    input: ProductCreateInput


class ProductUpdateInput(CamelModel):
    """Sparse product update."""

    id: str = Field(..., min_length=1)
    name: str | None = Field(default=None, min_length=3, max_length=255)
    price: Decimal | None = None

    def to_delta(self) -> ProductDelta:
        """Convert to domain delta."""
        return ProductDelta(id=self.id, name=self.name, price=self.price)


class UpdateProductPayload(ActorPayload):
    """Payload of product.update."""

    input: ProductUpdateInput


class FindAllPayload(ActorPayload):
    """Payload of product.find.all and product.find.all.summary."""

    pagination: PaginationSchema = Field(default_factory=PaginationSchema)


class ProductIdPayload(ActorPayload):
    """Payload of id-keyed messages."""

    id: str = Field(..., min_length=1)


class ProductCodePayload(ActorPayload):
    """Payload of product.find.one.code."""

    code: int = Field(..., ge=1)


class ValidateProductsPayload(CamelModel):
    """Payload of product.validate."""

    ids: list[str] = Field(..., min_length=1)


# ============================================================================
# Responses
# ============================================================================


class ProductResponse(CamelModel):
    """Enriched product."""

    id: str
    name: str
    price: Decimal
    code: int
    created_at: datetime
    deleted_at: datetime | None = None
    created_by: dict[str, Any] | None = None
    updated_by: dict[str, Any] | None = None
    deleted_by: dict[str, Any] | None = None

    @classmethod
    def from_entity(cls, product: EnrichedProduct) -> "ProductResponse":
        """Create from an enriched product."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            code=product.code,
            created_at=product.created_at,
            deleted_at=product.deleted_at,
            created_by=product.created_by.to_dict() if product.created_by else None,
            updated_by=product.updated_by.to_dict() if product.updated_by else None,
            deleted_by=product.deleted_by.to_dict() if product.deleted_by else None,
        )


class ProductSummaryResponse(CamelModel):
    """Unenriched product summary."""

    id: str
    name: str
    price: Decimal
    code: int
    created_at: datetime

    @classmethod
    def from_entity(cls, summary: ProductSummary) -> "ProductSummaryResponse":
        """Create from a product summary."""
        return cls(
            id=summary.id,
            name=summary.name,
            price=summary.price,
            code=summary.code,
            created_at=summary.created_at,
        )


class ProductReferenceResponse(CamelModel):
    """Product reference returned by batch validation."""

    id: str
    name: str
    code: int

    @classmethod
    def from_entity(cls, reference: ProductReference) -> "ProductReferenceResponse":
        """Create from a product reference."""
        return cls(id=reference.id, name=reference.name, code=reference.code)


class PageResponse(CamelModel, Generic[T]):
    """One page of records with metadata."""

    meta: PageMetaSchema
    data: list[T]


def product_page(result: PaginatedResult[EnrichedProduct]) -> PageResponse[ProductResponse]:
    """Convert a page of enriched products."""
    return PageResponse[ProductResponse](
        meta=PageMetaSchema.from_meta(result.meta),
        data=[ProductResponse.from_entity(p) for p in result.data],
    )


def summary_page(
    result: PaginatedResult[ProductSummary],
) -> PageResponse[ProductSummaryResponse]:
    """Convert a page of product summaries."""
    return PageResponse[ProductSummaryResponse](
        meta=PageMetaSchema.from_meta(result.meta),
        data=[ProductSummaryResponse.from_entity(s) for s in result.data],
    )
