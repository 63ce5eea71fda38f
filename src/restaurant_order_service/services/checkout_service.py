"""Checkout service for validating carts and submitting orders."""

import asyncio
import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from restaurant_order_service.adapters.base_adapter import OrderSubmitter
from restaurant_order_service.errors import OrderRejected
from restaurant_order_service.models.cart_models import Cart, Order, OrderSubmissionResult
from restaurant_order_service.observability import traced
from restaurant_order_service.observability.metrics import (
    record_order_rejected,
    record_submission_duration,
)
from restaurant_order_service.services import cart_ledger

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult:
    """Result of a checkout attempt.

    Attributes:
        success: Whether the order was accepted
        order: The submitted snapshot, None if validation failed
        order_id: Identifier assigned by the order endpoint
        estimated_time: Preparation time quoted by the order endpoint
        error_message: Rejection or submission error, None on success
        rejected: Whether the cart failed validation before submission
    """

    success: bool
    order: Order | None = None
    order_id: str | None = None
    estimated_time: str | None = None
    error_message: str | None = None
    rejected: bool = False


class CheckoutService:
    """Service for turning a cart into a submitted order.

    This service validates the cart against the minimum order value, takes a
    value snapshot of it, and hands the snapshot to the configured submitter.
    The cart itself is never modified.
    """

    def __init__(
        self,
        submitter: OrderSubmitter,
        minimum_order_value: Decimal,
        retry_delay_seconds: float = 2,
    ) -> None:
        """Initialize the CheckoutService.

        Args:
            submitter: Where order snapshots are sent
            minimum_order_value: Smallest order total accepted
            retry_delay_seconds: Seconds to wait before retrying a failed submission
        """
        self.submitter = submitter
        self.minimum_order_value = minimum_order_value
        self.retry_delay_seconds = retry_delay_seconds

    @traced("checkout")
    async def checkout(
        self,
        cart: Cart,
        discount_percent: Any = None,
        retry: bool = True,
    ) -> CheckoutResult:
        """Validate, snapshot and submit a cart.

        This method orchestrates the checkout flow:
        1. Validate the cart (non-empty, total at or above the minimum)
        2. Snapshot the cart into an immutable Order
        3. Submit the order (with one optional retry on transient failures)

        Args:
            cart: The session cart
            discount_percent: Optional discount applied to the order total
            retry: Whether to retry once on a retryable submission failure (default: True)

        Returns:
            CheckoutResult indicating success/failure and details
        """
        try:
            cart_ledger.attempt_order(cart, self.minimum_order_value)
        except OrderRejected as e:
            logger.warning(f"Order rejected: {e.message}")
            record_order_rejected(e.reason.value)
            return CheckoutResult(success=False, error_message=e.message, rejected=True)

        order = cart_ledger.snapshot_order(cart, discount_percent)
        result = await self._submit(order)

        if not result.success and result.retryable and retry:
            logger.warning(
                f"First submission attempt via {self.submitter.name} failed, retrying..."
            )
            await asyncio.sleep(self.retry_delay_seconds)
            result = await self._submit(order)

        if result.success:
            return CheckoutResult(
                success=True,
                order=order,
                order_id=result.order_id,
                estimated_time=result.estimated_time,
            )

        error_msg = result.error or "Order submission failed"
        logger.error(f"Order submission failed after all attempts: {error_msg}")
        return CheckoutResult(success=False, order=order, error_message=error_msg)

    async def _submit(self, order: Order) -> OrderSubmissionResult:
        started = time.perf_counter()
        result = await self.submitter.submit_order(order)
        record_submission_duration(self.submitter.name, time.perf_counter() - started)
        return result
