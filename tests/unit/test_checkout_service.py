"""Unit tests for CheckoutService."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from restaurant_order_service.adapters.base_adapter import OrderSubmitter
from restaurant_order_service.models.cart_models import Cart, Order, OrderSubmissionResult
from restaurant_order_service.services.checkout_service import CheckoutService


@pytest.mark.unit
class TestCheckoutService:
    """Test suite for CheckoutService."""

    @pytest.fixture
    def mock_submitter(self) -> OrderSubmitter:
        """Create a mock OrderSubmitter that accepts orders."""
        submitter = MagicMock(spec=OrderSubmitter)
        submitter.name = "mock"
        submitter.submit_order = AsyncMock(
            return_value=OrderSubmissionResult(
                success=True, order_id="BBO-1234", estimated_time="25 minutes"
            )
        )
        return submitter

    @pytest.fixture
    def checkout_service(self, mock_submitter: OrderSubmitter) -> CheckoutService:
        """Create a CheckoutService with a 10.00 minimum and no retry delay."""
        return CheckoutService(
            submitter=mock_submitter,
            minimum_order_value=Decimal("10"),
            retry_delay_seconds=0,
        )

    def test_service_initialization(self, mock_submitter: OrderSubmitter) -> None:
        service = CheckoutService(submitter=mock_submitter, minimum_order_value=Decimal("15"))

        assert service.submitter == mock_submitter
        assert service.minimum_order_value == Decimal("15")
        assert service.retry_delay_seconds == 2

    @pytest.mark.asyncio
    async def test_checkout_success(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        result = await checkout_service.checkout(mixed_cart)

        assert result.success is True
        assert result.order_id == "BBO-1234"
        assert result.estimated_time == "25 minutes"
        assert result.error_message is None
        assert result.order.total == Decimal("32.50")

        mock_submitter.submit_order.assert_called_once()
        submitted = mock_submitter.submit_order.call_args[0][0]
        assert isinstance(submitted, Order)
        assert len(submitted.items) == 3

    @pytest.mark.asyncio
    async def test_checkout_does_not_modify_cart(
        self, checkout_service: CheckoutService, mixed_cart: Cart
    ) -> None:
        before = mixed_cart.model_dump()

        await checkout_service.checkout(mixed_cart)

        assert mixed_cart.model_dump() == before

    @pytest.mark.asyncio
    async def test_checkout_with_discount(
        self, checkout_service: CheckoutService, mixed_cart: Cart
    ) -> None:
        result = await checkout_service.checkout(mixed_cart, discount_percent=10)

        assert result.order.total == Decimal("29.25")

    @pytest.mark.asyncio
    async def test_checkout_empty_cart_rejected(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        empty_cart: Cart,
    ) -> None:
        result = await checkout_service.checkout(empty_cart)

        assert result.success is False
        assert result.rejected is True
        assert result.order is None
        assert result.error_message == "Cannot place an order with an empty cart."
        mock_submitter.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_checkout_below_minimum_rejected(
        self,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        service = CheckoutService(submitter=mock_submitter, minimum_order_value=Decimal("50"))

        result = await service.checkout(mixed_cart)

        assert result.success is False
        assert result.rejected is True
        assert result.error_message == "Order total is below the minimum value of $50.00."
        mock_submitter.submit_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_checkout_retries_once_on_failure(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        """Test that a failed submission is retried and the retry result used."""
        mock_submitter.submit_order = AsyncMock(
            side_effect=[
                OrderSubmissionResult(
                    success=False, error="Order submission failed: timeout", retryable=True
                ),
                OrderSubmissionResult(success=True, order_id="BBO-5678", estimated_time="25 minutes"),
            ]
        )

        with patch(
            "restaurant_order_service.services.checkout_service.asyncio.sleep",
            new_callable=AsyncMock,
        ) as mock_sleep:
            result = await checkout_service.checkout(mixed_cart)

        assert result.success is True
        assert result.order_id == "BBO-5678"
        assert mock_submitter.submit_order.call_count == 2
        mock_sleep.assert_called_once_with(0)

    @pytest.mark.asyncio
    async def test_checkout_submits_same_snapshot_on_retry(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        mock_submitter.submit_order = AsyncMock(
            return_value=OrderSubmissionResult(success=False, error="down", retryable=True)
        )

        await checkout_service.checkout(mixed_cart)

        first, second = mock_submitter.submit_order.call_args_list
        assert first.args[0] is second.args[0]

    @pytest.mark.asyncio
    async def test_checkout_fails_after_retry(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        mock_submitter.submit_order = AsyncMock(
            return_value=OrderSubmissionResult(
                success=False, error="Order submission failed: down", retryable=True
            )
        )

        result = await checkout_service.checkout(mixed_cart)

        assert result.success is False
        assert result.rejected is False
        assert result.order is not None
        assert result.error_message == "Order submission failed: down"
        assert mock_submitter.submit_order.call_count == 2

    @pytest.mark.asyncio
    async def test_checkout_without_retry(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        mock_submitter.submit_order = AsyncMock(
            return_value=OrderSubmissionResult(success=False, retryable=True)
        )

        result = await checkout_service.checkout(mixed_cart, retry=False)

        assert result.success is False
        assert result.error_message == "Order submission failed"
        mock_submitter.submit_order.assert_called_once()

    @pytest.mark.asyncio
    async def test_checkout_does_not_retry_endpoint_rejection(
        self,
        checkout_service: CheckoutService,
        mock_submitter: MagicMock,
        mixed_cart: Cart,
    ) -> None:
        """Test that a deterministic rejection from the endpoint is not retried."""
        mock_submitter.submit_order = AsyncMock(
            return_value=OrderSubmissionResult(
                success=False, error="Invalid order data: No items in order."
            )
        )

        with patch(
            "restaurant_order_service.services.checkout_service.asyncio.sleep",
            new_callable=AsyncMock,
        ) as mock_sleep:
            result = await checkout_service.checkout(mixed_cart)

        assert result.success is False
        assert result.error_message == "Invalid order data: No items in order."
        mock_submitter.submit_order.assert_called_once()
        mock_sleep.assert_not_called()
