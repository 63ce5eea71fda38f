"""Unit tests for OrderIntakeService and InMemoryOrderRepository."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from restaurant_order_service.models.cart_models import OrderStatusEnum, SubmittedOrder
from restaurant_order_service.repositories.order_repository import InMemoryOrderRepository
from restaurant_order_service.services.order_intake_service import (
    EMPTY_ORDER_ERROR,
    ORDER_ID_EXHAUSTED_ERROR,
    OrderIntakeService,
)


def make_order(order_id: str, status: OrderStatusEnum = OrderStatusEnum.PENDING) -> SubmittedOrder:
    return SubmittedOrder(
        order_id=order_id,
        items=(),
        total=Decimal("10.00"),
        submitted_at=datetime.now(UTC),
        status=status,
    )


@pytest.mark.unit
class TestInMemoryOrderRepository:
    """Test suite for InMemoryOrderRepository."""

    @pytest.fixture
    def repository(self) -> InMemoryOrderRepository:
        return InMemoryOrderRepository()

    def test_save_and_get(self, repository: InMemoryOrderRepository) -> None:
        order = make_order("BBO-1000")

        assert repository.save(order) is True
        assert repository.get("BBO-1000") == order
        assert repository.exists("BBO-1000")

    def test_get_missing_returns_none(self, repository: InMemoryOrderRepository) -> None:
        assert repository.get("BBO-0000") is None

    def test_list_orders_in_submission_order(self, repository: InMemoryOrderRepository) -> None:
        repository.save(make_order("BBO-2000"))
        repository.save(make_order("BBO-1000"))

        assert [o.order_id for o in repository.list_orders()] == ["BBO-2000", "BBO-1000"]
        assert repository.count() == 2

    def test_list_orders_filters_by_status(self, repository: InMemoryOrderRepository) -> None:
        repository.save(make_order("BBO-1000"))
        repository.save(make_order("BBO-1001", status=OrderStatusEnum.DELIVERED))

        delivered = repository.list_orders(status=OrderStatusEnum.DELIVERED)

        assert [o.order_id for o in delivered] == ["BBO-1001"]

    def test_update_status(self, repository: InMemoryOrderRepository) -> None:
        repository.save(make_order("BBO-1000"))

        assert repository.update_status("BBO-1000", OrderStatusEnum.PROCESSING) is True
        assert repository.get("BBO-1000").status == OrderStatusEnum.PROCESSING

    def test_update_status_missing_order(self, repository: InMemoryOrderRepository) -> None:
        assert repository.update_status("BBO-9999", OrderStatusEnum.CANCELLED) is False


@pytest.mark.unit
class TestOrderIntakeService:
    """Test suite for OrderIntakeService."""

    @pytest.fixture
    def repository(self) -> InMemoryOrderRepository:
        return InMemoryOrderRepository()

    @pytest.fixture
    def intake_service(self, repository: InMemoryOrderRepository) -> OrderIntakeService:
        return OrderIntakeService(order_repository=repository)

    def test_accept_valid_order(
        self,
        intake_service: OrderIntakeService,
        repository: InMemoryOrderRepository,
        order_payload: dict,
    ) -> None:
        result = intake_service.accept_order(order_payload)

        assert result.success is True
        assert result.order_id.startswith("BBO-")
        assert 1000 <= int(result.order_id.split("-")[1]) <= 10999
        assert result.estimated_time == "25 minutes"

        stored = repository.get(result.order_id)
        assert stored is not None
        assert stored.status == OrderStatusEnum.PENDING
        assert stored.total == Decimal("19.97")
        assert [line.id for line in stored.items] == [1, 5]

    def test_custom_estimated_time(
        self, repository: InMemoryOrderRepository, order_payload: dict
    ) -> None:
        service = OrderIntakeService(order_repository=repository, estimated_time="40 minutes")

        assert service.accept_order(order_payload).estimated_time == "40 minutes"

    @pytest.mark.parametrize("payload", [{"items": []}, {"total": 5}, [], None, "order"])
    def test_rejects_payload_without_items(
        self,
        intake_service: OrderIntakeService,
        repository: InMemoryOrderRepository,
        payload: object,
    ) -> None:
        result = intake_service.accept_order(payload)

        assert result.success is False
        assert result.error == EMPTY_ORDER_ERROR
        assert repository.count() == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {"items": [{"id": 1, "name": "Burger"}], "total": 8.99},
            {"items": ["not-an-item"], "total": 1},
            {"items": [{"id": 1, "name": "B", "price": 1, "category": "M", "quantity": 0}]},
            {
                "items": [{"id": 1, "name": "B", "price": 1, "category": "M", "quantity": 1}],
                "total": "lots",
            },
        ],
    )
    def test_rejects_malformed_items(
        self,
        intake_service: OrderIntakeService,
        repository: InMemoryOrderRepository,
        payload: dict,
    ) -> None:
        result = intake_service.accept_order(payload)

        assert result.success is False
        assert result.error.startswith("Invalid order data")
        assert repository.count() == 0

    def test_generated_ids_are_unique(
        self, repository: InMemoryOrderRepository, order_payload: dict
    ) -> None:
        """Test that a colliding random id is redrawn."""
        repository.save(make_order("BBO-1000"))
        service = OrderIntakeService(order_repository=repository)

        with patch(
            "restaurant_order_service.services.order_intake_service.random.randint",
            MagicMock(side_effect=[1000, 1001]),
        ):
            result = service.accept_order(order_payload)

        assert result.order_id == "BBO-1001"

    def test_generated_id_falls_back_to_free_number(
        self, repository: InMemoryOrderRepository, order_payload: dict
    ) -> None:
        """Test that repeated collisions fall back to the lowest free number."""
        repository.save(make_order("BBO-1000"))
        service = OrderIntakeService(order_repository=repository)

        with patch(
            "restaurant_order_service.services.order_intake_service.random.randint",
            return_value=1000,
        ):
            result = service.accept_order(order_payload)

        assert result.order_id == "BBO-1001"

    def test_rejects_order_when_ids_exhausted(
        self, repository: InMemoryOrderRepository, order_payload: dict
    ) -> None:
        repository.exists = MagicMock(return_value=True)
        service = OrderIntakeService(order_repository=repository)

        result = service.accept_order(order_payload)

        assert result.success is False
        assert result.error == ORDER_ID_EXHAUSTED_ERROR
        assert repository.count() == 0

    def test_list_orders_by_status(
        self, intake_service: OrderIntakeService, order_payload: dict
    ) -> None:
        first = intake_service.accept_order(order_payload)
        second = intake_service.accept_order(order_payload)
        intake_service.update_status(second.order_id, OrderStatusEnum.DELIVERED)

        assert len(intake_service.list_orders()) == 2
        pending = intake_service.list_orders(status=OrderStatusEnum.PENDING)
        assert [o.order_id for o in pending] == [first.order_id]

    def test_update_status(self, intake_service: OrderIntakeService, order_payload: dict) -> None:
        result = intake_service.accept_order(order_payload)

        updated = intake_service.update_status(result.order_id, OrderStatusEnum.PROCESSING)

        assert updated.status == OrderStatusEnum.PROCESSING
        assert intake_service.get_order(result.order_id).status == OrderStatusEnum.PROCESSING

    def test_update_status_unknown_order(self, intake_service: OrderIntakeService) -> None:
        assert intake_service.update_status("BBO-0", OrderStatusEnum.CANCELLED) is None

    def test_get_order(self, intake_service: OrderIntakeService, order_payload: dict) -> None:
        result = intake_service.accept_order(order_payload)

        assert intake_service.get_order(result.order_id).order_id == result.order_id
        assert intake_service.get_order("BBO-0") is None
