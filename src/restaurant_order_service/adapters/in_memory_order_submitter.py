"""In-process order submitter that hands orders straight to the intake service."""

from restaurant_order_service.adapters.base_adapter import OrderSubmitter
from restaurant_order_service.models.cart_models import Order, OrderSubmissionResult
from restaurant_order_service.services.order_intake_service import OrderIntakeService


class InMemoryOrderSubmitter(OrderSubmitter):
    """Submitter for local runs and tests: no transport, same payload."""

    def __init__(self, intake_service: OrderIntakeService) -> None:
        super().__init__("in_memory")
        self.intake_service = intake_service

    async def submit_order(self, order: Order) -> OrderSubmissionResult:
        return self.intake_service.accept_order(order.to_payload())
