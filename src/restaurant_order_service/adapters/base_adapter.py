"""Base adapter for order submission.

This module defines the abstract interface the checkout flow uses to hand an
Order to whatever fulfils it. The checkout service never knows the transport.
Expected failures are reported through the returned result rather than by
raising exceptions.
"""

from abc import ABC, abstractmethod

from restaurant_order_service.models.cart_models import Order, OrderSubmissionResult


class OrderSubmitter(ABC):
    """Abstract base class for order submitters.

    Implementations (HTTP endpoint, in-process intake, test doubles) must
    inherit from this class and implement ``submit_order``.

    Error handling pattern:
    - submit_order returns a result with success=False on expected failures
    - Transient failures (network, unexpected status) set retryable=True
    - The checkout service decides retry logic
    """

    def __init__(self, name: str) -> None:
        """Initialize the submitter.

        Args:
            name: Short name used in logs and metrics (e.g., 'http', 'in_memory')
        """
        self.name = name

    @abstractmethod
    async def submit_order(self, order: Order) -> OrderSubmissionResult:
        """Submit an order snapshot for fulfilment.

        Args:
            order: Frozen order snapshot to submit

        Returns:
            OrderSubmissionResult: success with order id and estimated time,
            or success=False with an error message

        Note:
            Let exceptions bubble up only for unexpected errors.
        """
        pass
