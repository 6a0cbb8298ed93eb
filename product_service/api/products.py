"""Product RPC endpoints.

One POST endpoint per message pattern (`/rpc/product.create`, ...).
Each endpoint unpacks the payload, calls the matching ProductService
operation and serializes the result. Domain errors are translated to
responses by the handlers registered in `product_service.main`.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from product_service.api.schemas import (
    CreateProductPayload,
    ErrorResponse,
    FindAllPayload,
    PageResponse,
    ProductCodePayload,
    ProductIdPayload,
    ProductReferenceResponse,
    ProductResponse,
    ProductSummaryResponse,
    UpdateProductPayload,
    ValidateProductsPayload,
    product_page,
    summary_page,
)
from product_service.catalog.repository import ProductRepository
from product_service.catalog.service import ProductService
from product_service.catalog.users import UserResolver
from product_service.infrastructure.config import settings
from product_service.infrastructure.database import get_session
from product_service.infrastructure.identity_client import get_identity_client

router = APIRouter(prefix="/rpc", tags=["Products"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_product_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductService:
    """Build a product service bound to the request's session."""
    return ProductService(
        store=ProductRepository(session),
        resolver=UserResolver(get_identity_client()),
        price_scale=settings.price_scale,
    )


Service = Annotated[ProductService, Depends(get_product_service)]


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/product.create",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Create product",
)
async def create_product(payload: CreateProductPayload, service: Service) -> ProductResponse:
    """Create a product owned by the calling actor."""
    product = await service.create(payload.input.to_draft(), payload.actor.to_actor())
    return ProductResponse.from_entity(product)


@router.post(
    "/product.find.all",
    response_model=PageResponse[ProductResponse],
    responses=ERROR_RESPONSES,
    summary="List products",
)
async def find_all_products(
    payload: FindAllPayload, service: Service
) -> PageResponse[ProductResponse]:
    """List products visible to the actor with user references resolved."""
    result = await service.find_all(payload.pagination.to_params(), payload.actor.to_actor())
    return product_page(result)


@router.post(
    "/product.find.all.summary",
    response_model=PageResponse[ProductSummaryResponse],
    responses=ERROR_RESPONSES,
    summary="List product summaries",
)
async def find_all_product_summaries(
    payload: FindAllPayload, service: Service
) -> PageResponse[ProductSummaryResponse]:
    """List product summaries visible to the actor."""
    result = await service.find_all_summary(
        payload.pagination.to_params(), payload.actor.to_actor()
    )
    return summary_page(result)


@router.post(
    "/product.find.one",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Get product",
)
async def find_one_product(payload: ProductIdPayload, service: Service) -> ProductResponse:
    """Get a product by id."""
    product = await service.find_one(payload.id, payload.actor.to_actor())
    return ProductResponse.from_entity(product)


@router.post(
    "/product.find.one.code",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Get product by code",
)
async def find_one_product_by_code(
    payload: ProductCodePayload, service: Service
) -> ProductResponse:
    """Get a product by its numeric code."""
    product = await service.find_one_by_code(payload.code, payload.actor.to_actor())
    return ProductResponse.from_entity(product)


@router.post(
    "/product.find.one.summary",
    response_model=ProductSummaryResponse,
    responses=ERROR_RESPONSES,
    summary="Get product summary",
)
async def find_one_product_summary(
    payload: ProductIdPayload, service: Service
) -> ProductSummaryResponse:
    """Get a product summary by id."""
    summary = await service.find_one_summary(payload.id, payload.actor.to_actor())
    return ProductSummaryResponse.from_entity(summary)


@router.post(
    "/product.validate",
    response_model=list[ProductReferenceResponse],
    responses=ERROR_RESPONSES,
    summary="Validate product ids",
)
async def validate_products(
    payload: ValidateProductsPayload, service: Service
) -> list[ProductReferenceResponse]:
    """Check that every id names an existing product."""
    references = await service.validate_batch(payload.ids)
    return [ProductReferenceResponse.from_entity(r) for r in references]


@router.post(
    "/product.update",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Update product",
)
async def update_product(payload: UpdateProductPayload, service: Service) -> ProductResponse:
    """Apply a sparse update to a product."""
    product = await service.update(payload.input.to_delta(), payload.actor.to_actor())
    return ProductResponse.from_entity(product)


@router.post(
    "/product.restore",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Restore product",
)
async def restore_product(payload: ProductIdPayload, service: Service) -> ProductResponse:
    """Restore a soft-deleted product."""
    product = await service.restore(payload.id, payload.actor.to_actor())
    return ProductResponse.from_entity(product)


@router.post(
    "/product.remove",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Remove product",
)
async def remove_product(payload: ProductIdPayload, service: Service) -> ProductResponse:
    """Soft-delete a product."""
    product = await service.remove(payload.id, payload.actor.to_actor())
    return ProductResponse.from_entity(product)
