"""State machines for domain entities.

Deterministic state machine for the soft-delete status of a product.
The status is derived from the deleted_at/deleted_by_id pair; it is
never stored on its own.
"""

from enum import Enum

from product_service.domain.exceptions import (
    ProductAlreadyDeletedError,
    ProductNotDeletedError,
)


class DeleteStatus(str, Enum):
    """Product soft-delete states.

    State diagram:
        ACTIVE ──── remove ────► DELETED
          ▲                        │
          └─────── restore ────────┘
    """

    ACTIVE = "active"
    DELETED = "deleted"

    def can_transition_to(self, target: "DeleteStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _DELETE_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["DeleteStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return list(_DELETE_TRANSITIONS.get(self, set()))

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state.

        Returns:
            True if no further transitions are possible.
        """
        return len(_DELETE_TRANSITIONS.get(self, set())) == 0


# Delete state transitions (defined outside enum to avoid Enum restrictions)
_DELETE_TRANSITIONS: dict[DeleteStatus, set[DeleteStatus]] = {
    DeleteStatus.ACTIVE: {DeleteStatus.DELETED},
    DeleteStatus.DELETED: {DeleteStatus.ACTIVE},
}


def validate_delete_transition(
    product_id: str,
    current: DeleteStatus,
    target: DeleteStatus,
) -> None:
    """Validate a soft-delete transition.

    Args:
        product_id: Product ID for error messages.
        current: Current delete status.
        target: Target delete status.

    Raises:
        ProductAlreadyDeletedError: If removing a deleted product.
        ProductNotDeletedError: If restoring an active product.
    """
    if current.can_transition_to(target):
        return
    if target is DeleteStatus.DELETED:
        raise ProductAlreadyDeletedError(product_id)
    raise ProductNotDeletedError(product_id)
