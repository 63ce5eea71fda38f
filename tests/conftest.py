"""Shared pytest fixtures and configuration for all tests."""

import os

# Must be set before src.main is imported so no application is built at import time
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from restaurant_order_service.models.cart_models import Cart, CartLine  # noqa: E402
from restaurant_order_service.models.menu_models import Catalog, MenuItem  # noqa: E402


@pytest.fixture
def sample_menu_items() -> list[MenuItem]:
    """Fixture providing the sample menu used across tests."""
    return [
        MenuItem(id=1, name="Burger", price=Decimal("8.99"), category="Mains"),
        MenuItem(id=2, name="Pizza", price=Decimal("10.99"), category="Mains"),
        MenuItem(id=3, name="Salad", price=Decimal("6.99"), category="Sides"),
        MenuItem(id=4, name="Fries", price=Decimal("3.99"), category="Sides"),
        MenuItem(id=5, name="Soda", price=Decimal("1.99"), category="Drinks"),
    ]


@pytest.fixture
def sample_catalog(sample_menu_items: list[MenuItem]) -> Catalog:
    """Fixture providing a catalog built from the sample menu."""
    return Catalog(items=sample_menu_items)


@pytest.fixture
def empty_cart() -> Cart:
    """Fixture providing a fresh, empty cart."""
    return Cart()


@pytest.fixture
def mixed_cart() -> Cart:
    """Fixture providing a cart totalling 32.50."""
    return Cart(
        lines=[
            CartLine(id=1, name="Burger", price=Decimal("10.0"), category="Mains", quantity=2),
            CartLine(id=2, name="Fries", price=Decimal("5.0"), category="Sides", quantity=1),
            CartLine(id=3, name="Soda", price=Decimal("2.5"), category="Drinks", quantity=3),
        ]
    )


@pytest.fixture
def order_payload() -> dict:
    """Fixture providing a valid order submission payload."""
    return {
        "items": [
            {"id": 1, "name": "Burger", "price": 8.99, "category": "Mains", "quantity": 2},
            {"id": 5, "name": "Soda", "price": 1.99, "category": "Drinks", "quantity": 1},
        ],
        "total": 19.97,
    }
