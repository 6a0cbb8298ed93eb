"""API layer module.

Contains the FastAPI routers that bind message patterns to the
product service, plus request/response schemas.
"""

from product_service.api.health import router as health_router
from product_service.api.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
]
