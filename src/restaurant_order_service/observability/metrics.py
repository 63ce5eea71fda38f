"""Custom metrics for the restaurant order service."""

from opentelemetry import metrics

meter = metrics.get_meter("order-svc")

cart_action_counter = meter.create_counter(
    name="cart_actions_total",
    description="Total number of cart add/update actions by outcome",
    unit="1",
)

order_accepted_counter = meter.create_counter(
    name="orders_accepted_total",
    description="Total number of orders accepted by the order endpoint",
    unit="1",
)

order_rejected_counter = meter.create_counter(
    name="orders_rejected_total",
    description="Total number of rejected order attempts by reason",
    unit="1",
)

order_total_histogram = meter.create_histogram(
    name="order_total_amount",
    description="Order totals of accepted orders",
    unit="USD",
)

order_submission_duration = meter.create_histogram(
    name="order_submission_duration_seconds",
    description="Duration of order submission calls by submitter",
    unit="s",
)


def record_cart_action(action: str, success: bool) -> None:
    """Record a cart action.

    Args:
        action: The action performed ("add" or "update")
        success: Whether the action changed the cart
    """
    cart_action_counter.add(1, {"action": action, "success": success})


def record_order_accepted(total: float) -> None:
    """Record an accepted order.

    Args:
        total: The order total
    """
    order_accepted_counter.add(1)
    order_total_histogram.record(total)


def record_order_rejected(reason: str) -> None:
    """Record a rejected order attempt.

    Args:
        reason: Why the order was rejected (e.g., "empty_cart", "below_minimum")
    """
    order_rejected_counter.add(1, {"reason": reason})


def record_submission_duration(submitter: str, duration_seconds: float) -> None:
    """Record the duration of an order submission.

    Args:
        submitter: Name of the submitter used
        duration_seconds: Duration in seconds
    """
    order_submission_duration.record(duration_seconds, {"submitter": submitter})
