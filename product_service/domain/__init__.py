"""Domain layer for the product catalog.

Contains entities, value objects, the soft-delete state machine,
domain exceptions and the ports the catalog depends on.
"""

from product_service.domain.entities import (
    Actor,
    EnrichedProduct,
    ProductDelta,
    ProductDraft,
    ProductRecord,
    ProductReference,
    ProductSummary,
    Role,
    UserSummary,
)
from product_service.domain.exceptions import (
    DomainError,
    InternalError,
    InvalidInputError,
    InvalidPriceError,
    InvalidStateError,
    NotFoundError,
    ProductAlreadyDeletedError,
    ProductBatchMismatchError,
    ProductNotDeletedError,
    ProductNotFoundError,
    RemoteDependencyError,
)
from product_service.domain.ports import ProductStore, UserDirectory
from product_service.domain.state_machines import DeleteStatus, validate_delete_transition
from product_service.domain.value_objects import Price

__all__ = [
    # Entities
    "Actor",
    "EnrichedProduct",
    "ProductDelta",
    "ProductDraft",
    "ProductRecord",
    "ProductReference",
    "ProductSummary",
    "Role",
    "UserSummary",
    # Value objects
    "Price",
    # State machines
    "DeleteStatus",
    "validate_delete_transition",
    # Ports
    "ProductStore",
    "UserDirectory",
    # Exceptions
    "DomainError",
    "InternalError",
    "InvalidInputError",
    "InvalidPriceError",
    "InvalidStateError",
    "NotFoundError",
    "ProductAlreadyDeletedError",
    "ProductBatchMismatchError",
    "ProductNotDeletedError",
    "ProductNotFoundError",
    "RemoteDependencyError",
]
