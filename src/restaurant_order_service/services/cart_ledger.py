"""Cart ledger: pure operations over an explicitly passed cart.

The cart is owned by the caller and threaded through each call. Only
``add_item`` and ``update_quantity`` mutate, and only the cart they are given.
Everything else is side-effect free.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from restaurant_order_service.errors import (
    NotFoundError,
    OrderRejected,
    RejectionReason,
    ValidationError,
)
from restaurant_order_service.models.cart_models import Cart, CartLine, Order, OrderLine
from restaurant_order_service.models.menu_models import Catalog

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _to_decimal(value: Any, name: str) -> Decimal:
    """Convert a numeric argument to Decimal.

    Raises:
        ValidationError: If the value is not a finite int, float or Decimal
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")

    # str() keeps floats like 8.99 from expanding to their binary representation
    result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not result.is_finite():
        raise ValidationError(f"{name} must be a finite number")
    return result


def _round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def coerce_item_id(item_id: Any) -> int | None:
    if isinstance(item_id, float) and item_id.is_integer():
        return int(item_id)
    try:
        return int(str(item_id).strip())
    except ValueError:
        return None


def add_item(catalog: Catalog, cart: Cart, item_id: int | str) -> Cart:
    """Add one unit of a menu item to the cart.

    Args:
        catalog: Catalog to look the item up in
        cart: Cart to update in place
        item_id: Menu item identifier (int or numeric string)

    Returns:
        The updated cart

    Raises:
        NotFoundError: If the item is not in the catalog
    """
    numeric_id = coerce_item_id(item_id)
    menu_item = catalog.get(numeric_id) if numeric_id is not None else None
    if menu_item is None:
        raise NotFoundError(
            "Sorry, this menu item could not be found. Please try another.",
            item_id=numeric_id,
        )

    line = cart.find_line(menu_item.id)
    if line is not None:
        line.quantity += 1
    else:
        cart.lines.append(CartLine.from_menu_item(menu_item))

    logger.debug(f"Added item {menu_item.id} to cart ({cart.item_count} units)")
    return cart


def update_quantity(cart: Cart, item_id: int | str, delta: int) -> Cart:
    """Change the quantity of a cart line, removing it when it drops below 1.

    Args:
        cart: Cart to update in place
        item_id: Menu item identifier of the line
        delta: Amount to add to the quantity (may be negative)

    Returns:
        The updated cart

    Raises:
        NotFoundError: If the cart has no line for the item
    """
    numeric_id = coerce_item_id(item_id)
    line = cart.find_line(numeric_id) if numeric_id is not None else None
    if line is None:
        raise NotFoundError("Item not found in cart. Cannot update quantity.", item_id=numeric_id)

    new_quantity = line.quantity + delta
    if new_quantity < 1:
        cart.lines.remove(line)
        logger.debug(f"Removed item {line.id} from cart")
    else:
        line.quantity = new_quantity

    return cart


def compute_total(cart: Cart | None) -> Decimal:
    """Sum of price times quantity over all lines. 0 for an empty or missing cart."""
    if cart is None or cart.is_empty:
        return Decimal("0")
    return sum((line.subtotal for line in cart.lines), Decimal("0"))


def apply_discount(total: Any, percent: Any) -> Any:
    """Apply a percentage discount to a total.

    Invalid percentages (non-numeric or outside [0, 100]) leave the total
    unchanged and rounded half-up to cents. A non-numeric total is returned
    exactly as given.

    Args:
        total: The amount to discount
        percent: Discount percentage, e.g. 10 for 10%

    Returns:
        Discounted amount rounded to 2 decimal places, or the original
        total if it is not a number
    """
    try:
        amount = _to_decimal(total, "total")
    except ValidationError as e:
        logger.warning(f"Discount not applied: {e.message}")
        return total

    try:
        discount = _to_decimal(percent, "percent")
    except ValidationError as e:
        logger.warning(f"Invalid discount ignored: {e.message}")
        return _round_cents(amount)

    if discount < 0 or discount > 100:
        logger.warning(f"Discount percentage {discount} outside [0, 100], ignored")
        return _round_cents(amount)

    return _round_cents(amount * (1 - discount / 100))


def is_order_valid(cart: Cart | None, minimum_value: Any) -> bool:
    """Check whether a cart is non-empty and meets the minimum order value."""
    if cart is None or cart.is_empty:
        return False
    return compute_total(cart) >= _to_decimal(minimum_value, "minimum_value")


def attempt_order(cart: Cart | None, minimum_value: Any) -> bool:
    """Validate an order attempt.

    Args:
        cart: The cart to order
        minimum_value: Minimum order total

    Returns:
        True when the order may proceed

    Raises:
        OrderRejected: If the cart is empty or its total is below the minimum
    """
    if is_order_valid(cart, minimum_value):
        logger.info("Order attempt is valid")
        return True

    minimum = _round_cents(_to_decimal(minimum_value, "minimum_value"))
    if cart is None or cart.is_empty:
        raise OrderRejected(
            "Cannot place an order with an empty cart.",
            reason=RejectionReason.EMPTY_CART,
            minimum_value=minimum,
        )
    raise OrderRejected(
        f"Order total is below the minimum value of ${minimum}.",
        reason=RejectionReason.BELOW_MINIMUM,
        minimum_value=minimum,
    )


def snapshot_order(cart: Cart, discount_percent: Any = None) -> Order:
    """Take a value copy of the cart for submission.

    Args:
        cart: The cart to snapshot
        discount_percent: Optional discount applied to the total

    Returns:
        Frozen Order independent of later cart changes
    """
    total = compute_total(cart)
    if discount_percent is not None:
        total = apply_discount(total, discount_percent)

    return Order(
        items=tuple(OrderLine.from_cart_line(line) for line in cart.lines),
        total=total,
    )
