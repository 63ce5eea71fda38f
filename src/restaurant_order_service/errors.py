"""Domain errors for cart and order operations.

All of these are recoverable at the call site. They carry a user-facing
message that the notice service can show as-is.
"""

from decimal import Decimal
from enum import Enum


class OrderServiceError(Exception):
    """Base class for recoverable cart and order errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(OrderServiceError):
    """A referenced menu item or cart line does not exist."""

    def __init__(self, message: str, item_id: int | None = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class ValidationError(OrderServiceError):
    """Numeric input to a pricing function is invalid."""


class RejectionReason(str, Enum):
    """Why an order attempt was rejected."""

    EMPTY_CART = "empty_cart"
    BELOW_MINIMUM = "below_minimum"


class OrderRejected(OrderServiceError):
    """An order attempt failed validation."""

    def __init__(
        self,
        message: str,
        reason: RejectionReason,
        minimum_value: Decimal | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.minimum_value = minimum_value
