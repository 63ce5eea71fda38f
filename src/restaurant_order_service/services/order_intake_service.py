"""Order intake service backing the order submission endpoint."""

import logging
import random
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from restaurant_order_service.models.cart_models import (
    OrderLine,
    OrderStatusEnum,
    OrderSubmissionResult,
    SubmittedOrder,
)
from restaurant_order_service.observability.metrics import record_order_accepted
from restaurant_order_service.repositories.order_repository import InMemoryOrderRepository

logger = logging.getLogger(__name__)

ORDER_ID_PREFIX = "BBO"
EMPTY_ORDER_ERROR = "Invalid order data: No items in order."
ORDER_ID_EXHAUSTED_ERROR = "Unable to accept more orders right now. Please try again later."
ORDER_NUMBER_MIN = 1000
ORDER_NUMBER_MAX = 10999
RANDOM_ID_ATTEMPTS = 20


class OrderIntakeService:
    """Service that validates and records incoming order payloads.

    Expected failures (empty or malformed payloads) come back as a failed
    OrderSubmissionResult rather than an exception, so the HTTP layer and the
    in-memory submitter can both pass them straight through.
    """

    def __init__(
        self,
        order_repository: InMemoryOrderRepository,
        estimated_time: str = "25 minutes",
    ) -> None:
        """Initialize the OrderIntakeService.

        Args:
            order_repository: Repository for accepted orders
            estimated_time: Preparation time quoted to customers
        """
        self.order_repository = order_repository
        self.estimated_time = estimated_time

    def accept_order(self, payload: Any) -> OrderSubmissionResult:
        """Validate an order payload and record it.

        Args:
            payload: Decoded JSON body, ``{"items": [...], "total": number}``

        Returns:
            OrderSubmissionResult with the generated order id, or a failure
        """
        if not isinstance(payload, dict) or not payload.get("items"):
            logger.error(f"Invalid order data: no items in order: {payload!r}")
            return OrderSubmissionResult(success=False, error=EMPTY_ORDER_ERROR)

        order_id = self._generate_order_id()
        if order_id is None:
            logger.error("No order ids left to allocate")
            return OrderSubmissionResult(success=False, error=ORDER_ID_EXHAUSTED_ERROR)

        try:
            items = tuple(OrderLine(**item) for item in payload["items"])
            total = Decimal(str(payload.get("total", 0)))
            order = SubmittedOrder(
                order_id=order_id,
                items=items,
                total=total,
                submitted_at=datetime.now(UTC),
            )
        except (TypeError, ArithmeticError, PydanticValidationError) as e:
            logger.error(f"Error processing order payload: {e}")
            return OrderSubmissionResult(success=False, error=f"Invalid order data: {e}")

        self.order_repository.save(order)
        record_order_accepted(float(order.total))
        logger.info(f"Accepted order {order.order_id} with {len(order.items)} lines")

        return OrderSubmissionResult(
            success=True,
            order_id=order.order_id,
            estimated_time=self.estimated_time,
        )

    def get_order(self, order_id: str) -> SubmittedOrder | None:
        return self.order_repository.get(order_id)

    def list_orders(self, status: OrderStatusEnum | None = None) -> list[SubmittedOrder]:
        return self.order_repository.list_orders(status=status)

    def update_status(self, order_id: str, status: OrderStatusEnum) -> SubmittedOrder | None:
        """Move an accepted order to a new status.

        Args:
            order_id: The order identifier
            status: New status

        Returns:
            The updated order, or None if it does not exist
        """
        if not self.order_repository.update_status(order_id, status):
            logger.warning(f"Cannot update status of unknown order {order_id}")
            return None

        logger.info(f"Order {order_id} moved to {status.value}")
        return self.order_repository.get(order_id)

    def _generate_order_id(self) -> str | None:
        """Generate a unique ``BBO-<n>`` order id.

        Draws a few random numbers first, then falls back to the lowest free
        number so a crowded id space still resolves.

        Returns:
            A free order id, or None once every number is taken
        """
        for _ in range(RANDOM_ID_ATTEMPTS):
            order_id = f"{ORDER_ID_PREFIX}-{random.randint(ORDER_NUMBER_MIN, ORDER_NUMBER_MAX)}"
            if not self.order_repository.exists(order_id):
                return order_id

        for number in range(ORDER_NUMBER_MIN, ORDER_NUMBER_MAX + 1):
            order_id = f"{ORDER_ID_PREFIX}-{number}"
            if not self.order_repository.exists(order_id):
                return order_id

        return None
