"""Product service main application module.

This module initializes the FastAPI application and configures
core middleware, routers, domain error translation and
startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from product_service.api.health import router as health_router
from product_service.api.middleware import setup_middleware
from product_service.api.products import router as products_router
from product_service.domain.exceptions import (
    DomainError,
    InternalError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    RemoteDependencyError,
)
from product_service.infrastructure.config import settings
from product_service.infrastructure.database import engine
from product_service.infrastructure.identity_client import (
    close_identity_client,
    get_identity_client,
)
from product_service.infrastructure.logging import configure_logging

configure_logging(settings.log_level, debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting product service",
        version=settings.api_version,
        debug=settings.debug,
    )

    identity_client = get_identity_client()
    logger.info(
        "Identity service configured",
        url=identity_client.base_url,
        timeout=identity_client.timeout,
    )

    yield

    logger.info("Shutting down product service")
    await close_identity_client()
    await engine.dispose()


app = FastAPI(
    title="Product Service",
    description="Product catalog with soft-delete lifecycle over message-style RPC",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)


# ============================================================================
# Domain Exception Handlers
# ============================================================================

# Most specific family first; the first isinstance match wins
ERROR_KINDS: list[tuple[type[DomainError], int, str]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (InvalidStateError, status.HTTP_409_CONFLICT, "INVALID_STATE"),
    (RemoteDependencyError, status.HTTP_502_BAD_GATEWAY, "REMOTE_DEPENDENCY_FAILURE"),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"),
]


def classify_error(exc: DomainError) -> tuple[int, str]:
    """Map a domain error to its status code and error code.

    Args:
        exc: Domain error.

    Returns:
        (status code, error code); unknown families are internal errors.
    """
    for kind, status_code, error_code in ERROR_KINDS:
        if isinstance(exc, kind):
            return status_code, error_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Handle domain exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)
    status_code, error_code = classify_error(exc)

    log = logger.error if status_code >= 500 else logger.info
    log(
        "Request failed",
        path=request.url.path,
        error_code=error_code,
        error=exc.message,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_code,
            "error_code": error_code,
            "message": exc.message,
            "details": exc.details,
            "request_id": request_id,
        },
    )
