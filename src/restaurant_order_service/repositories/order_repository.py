"""In-memory repository for submitted orders.

Orders live only for the lifetime of the process. Following the pattern of
the other data-access code, lookups return None for missing records instead
of raising.
"""

import logging

from restaurant_order_service.models.cart_models import OrderStatusEnum, SubmittedOrder

logger = logging.getLogger(__name__)


class InMemoryOrderRepository:
    """Repository for storing accepted orders in process memory."""

    def __init__(self) -> None:
        self._orders: dict[str, SubmittedOrder] = {}

    def save(self, order: SubmittedOrder) -> bool:
        """Save an order, replacing any existing order with the same id.

        Args:
            order: The order to save

        Returns:
            bool: True once stored
        """
        self._orders[order.order_id] = order
        logger.debug(f"Saved order {order.order_id}")
        return True

    def get(self, order_id: str) -> SubmittedOrder | None:
        """Retrieve an order by id.

        Args:
            order_id: The order identifier

        Returns:
            SubmittedOrder if found, None otherwise
        """
        return self._orders.get(order_id)

    def exists(self, order_id: str) -> bool:
        return order_id in self._orders

    def list_orders(self, status: OrderStatusEnum | None = None) -> list[SubmittedOrder]:
        """List stored orders in submission order.

        Args:
            status: Optional status to filter by

        Returns:
            List of orders, empty list if none match
        """
        orders = list(self._orders.values())
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return orders

    def update_status(self, order_id: str, status: OrderStatusEnum) -> bool:
        """Update the status of a stored order.

        Args:
            order_id: The order identifier
            status: New status

        Returns:
            bool: True if updated, False if the order does not exist
        """
        order = self._orders.get(order_id)
        if order is None:
            return False
        self._orders[order_id] = order.model_copy(update={"status": status})
        return True

    def count(self) -> int:
        return len(self._orders)
