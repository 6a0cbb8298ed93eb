"""Domain exceptions.

All domain-level errors raised by the catalog. Each family maps to one
caller-facing error kind (invalid input, not found, invalid state,
remote dependency failure, internal error); the API layer translates
the family into a status code.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Invalid Input Errors
# ============================================================================


class InvalidInputError(DomainError):
    """Raised when caller-supplied data breaks a business rule."""

    pass


class InvalidPriceError(InvalidInputError):
    """Raised when a price is not a positive decimal of the allowed scale."""

    def __init__(self, value: Any, reason: str) -> None:
        """Initialize invalid price error.

        Args:
            value: The rejected price value.
            reason: Explanation of why the price is invalid.
        """
        super().__init__(
            f"Invalid price {value!r}: {reason}",
            details={"price": str(value), "reason": reason},
        )


class ProductBatchMismatchError(InvalidInputError):
    """Raised when a batch of product ids does not fully resolve."""

    def __init__(self, ids: list[str]) -> None:
        """Initialize batch mismatch error.

        Args:
            ids: The full list of requested ids, as received.
        """
        super().__init__(
            f"Some products were not found: {', '.join(ids)}",
            details={"ids": ids},
        )


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when no record matches under the caller's visibility."""

    pass


class ProductNotFoundError(NotFoundError):
    """Raised when a product lookup finds nothing."""

    def __init__(self, value: str | int, field: str = "id") -> None:
        """Initialize product not found error.

        Args:
            value: The looked-up key value.
            field: Name of the key ("id" or "code").
        """
        super().__init__(
            f"Product with {field} {value} not found",
            details={field: value},
        )


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the record's current state."""

    pass


class ProductAlreadyDeletedError(InvalidStateError):
    """Raised when removing a product that is already soft-deleted."""

    def __init__(self, product_id: str) -> None:
        """Initialize already deleted error.

        Args:
            product_id: ID of the product.
        """
        super().__init__(
            f"Product with id {product_id} is already deleted",
            details={"product_id": product_id},
        )


class ProductNotDeletedError(InvalidStateError):
    """Raised when restoring a product that is not soft-deleted."""

    def __init__(self, product_id: str) -> None:
        """Initialize not deleted error.

        Args:
            product_id: ID of the product.
        """
        super().__init__(
            f"Product with id {product_id} is not deleted",
            details={"product_id": product_id},
        )


# ============================================================================
# Dependency and Internal Errors
# ============================================================================


class RemoteDependencyError(DomainError):
    """Raised when a call to another service fails or times out."""

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize remote dependency error.

        Args:
            service: Name of the remote service.
            message: Description of the failure.
            status_code: HTTP status returned by the service, if any.
        """
        super().__init__(
            f"[{service}] {message}",
            details={"service": service, "status_code": status_code},
        )
        self.service = service
        self.status_code = status_code


class InternalError(DomainError):
    """Raised when an unexpected failure interrupts a write."""

    pass
