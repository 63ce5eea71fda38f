"""HTTP order submitter.

Posts order snapshots as JSON to the order endpoint's ``/api/orders`` path.
"""

import logging

import httpx

from restaurant_order_service.adapters.base_adapter import OrderSubmitter
from restaurant_order_service.models.cart_models import Order, OrderSubmissionResult

logger = logging.getLogger(__name__)

ORDERS_PATH = "/api/orders"


class HttpOrderSubmitter(OrderSubmitter):
    """Submitter that sends orders to the order endpoint over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP submitter.

        Args:
            base_url: Base URL of the order endpoint (e.g., "http://localhost:8001")
            api_key: Optional value sent in the X-API-Key header
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.ASGITransport for in-process apps)
        """
        super().__init__("http")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    async def submit_order(self, order: Order) -> OrderSubmissionResult:
        """POST the order payload and parse the endpoint's response.

        Args:
            order: Order snapshot to submit

        Returns:
            OrderSubmissionResult from the endpoint, or a failure result on
            unexpected statuses and transport errors (marked retryable)
        """
        url = f"{self.base_url}{ORDERS_PATH}"
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=order.to_payload(), headers=headers)

                if response.status_code in (201, 400):
                    result = OrderSubmissionResult.model_validate(response.json())
                    if result.success:
                        logger.info(f"Order submitted: {result.order_id}")
                    else:
                        logger.error(f"Order endpoint rejected order: {result.error}")
                    return result

                logger.error(f"Order submission failed with status {response.status_code}")
                return OrderSubmissionResult(
                    success=False,
                    error=f"Order submission failed with status {response.status_code}",
                    retryable=True,
                )

        except httpx.RequestError as e:
            logger.error(f"Order submission to {url} failed: {e}")
            return OrderSubmissionResult(
                success=False, error=f"Order submission failed: {e}", retryable=True
            )
        except ValueError as e:
            logger.error(f"Order endpoint returned an unreadable response: {e}")
            return OrderSubmissionResult(success=False, error=f"Order submission failed: {e}")
