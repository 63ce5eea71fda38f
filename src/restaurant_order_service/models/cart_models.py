"""Cart, order and submission models.

The Cart is the only mutable state in the ledger. Orders are frozen value
copies taken at submission time, so a submitter can serialize them without
touching the live cart.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from restaurant_order_service.models.menu_models import MenuItem


class OrderStatusEnum(str, Enum):
    """Enumeration of order status values."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class CartLine(BaseModel):
    """A menu item plus the requested quantity."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., description="Menu item identifier")
    name: str = Field(..., description="Menu item name")
    price: Decimal = Field(..., description="Unit price", ge=0)
    category: str = Field(..., description="Menu item category")
    quantity: int = Field(default=1, description="Requested quantity", ge=1)

    @classmethod
    def from_menu_item(cls, item: MenuItem, quantity: int = 1) -> "CartLine":
        """Create a cart line from a catalog entry."""
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            category=item.category,
            quantity=quantity,
        )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Cart(BaseModel):
    """Ordered collection of cart lines, at most one per menu item."""

    lines: list[CartLine] = Field(default_factory=list, description="Cart lines in insertion order")

    def find_line(self, item_id: int) -> CartLine | None:
        """Find the line for a menu item.

        Args:
            item_id: The menu item identifier

        Returns:
            CartLine if present, None otherwise
        """
        for line in self.lines:
            if line.id == item_id:
                return line
        return None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(line.quantity for line in self.lines)


class OrderLine(BaseModel):
    """Frozen copy of a cart line inside an order."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: Decimal = Field(..., ge=0)
    category: str
    quantity: int = Field(..., ge=1)

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "OrderLine":
        return cls(
            id=line.id,
            name=line.name,
            price=line.price,
            category=line.category,
            quantity=line.quantity,
        )


class Order(BaseModel):
    """Immutable snapshot of a cart submitted as a unit."""

    model_config = ConfigDict(frozen=True)

    items: tuple[OrderLine, ...] = Field(..., description="Snapshot of the cart lines")
    total: Decimal = Field(..., description="Order total", ge=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Snapshot timestamp"
    )

    def to_payload(self) -> dict[str, Any]:
        """Convert to the order submission wire format.

        Returns:
            dict: ``{"items": [...], "total": number}``
        """
        return {
            "items": [line.model_dump() for line in self.items],
            "total": float(self.total),
        }


class SubmittedOrder(BaseModel):
    """Server-side record of an accepted order."""

    order_id: str = Field(..., description="Generated order identifier")
    items: tuple[OrderLine, ...] = Field(..., description="Ordered lines")
    total: Decimal = Field(..., description="Order total as submitted", ge=0)
    submitted_at: datetime = Field(..., description="Acceptance timestamp")
    status: OrderStatusEnum = Field(default=OrderStatusEnum.PENDING, description="Order status")

    @field_serializer("total")
    def serialize_total(self, total: Decimal) -> float:
        return float(total)


class OrderSubmissionResult(BaseModel):
    """Outcome of submitting an order to the order endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    order_id: str | None = Field(None, alias="orderId")
    estimated_time: str | None = Field(None, alias="estimatedTime")
    error: str | None = None
    retryable: bool = Field(
        default=False,
        exclude=True,
        description="Whether the failure was a transport problem worth retrying",
    )

    def to_response(self) -> dict[str, Any]:
        """Convert to the JSON response body, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
