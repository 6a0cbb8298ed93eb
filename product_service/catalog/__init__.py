"""Product Catalog Service.

Provides the product lifecycle operations, the SQLAlchemy-backed
product store, pagination and user reference enrichment.
"""

from product_service.catalog.models import Product
from product_service.catalog.pagination import PageMeta, PaginatedResult, PaginationParams
from product_service.catalog.repository import ProductRepository
from product_service.catalog.service import ProductService
from product_service.catalog.users import UserResolver

__all__ = [
    # Models
    "Product",
    # Repository
    "ProductRepository",
    # Pagination
    "PageMeta",
    "PaginatedResult",
    "PaginationParams",
    # Enrichment
    "UserResolver",
    # Service
    "ProductService",
]
