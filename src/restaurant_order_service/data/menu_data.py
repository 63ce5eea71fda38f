"""Default menu served by the order endpoint."""

from decimal import Decimal

from restaurant_order_service.models.menu_models import Catalog, MenuItem

DEFAULT_MENU_ITEMS = [
    MenuItem(id=1, name="Burger", price=Decimal("9.50"), category="Mains"),
    MenuItem(id=2, name="Pizza", price=Decimal("11.50"), category="Mains"),
    MenuItem(id=3, name="Salad", price=Decimal("7.50"), category="Sides"),
    MenuItem(id=4, name="Fries", price=Decimal("4.50"), category="Sides"),
    MenuItem(id=5, name="Soda", price=Decimal("2.50"), category="Drinks"),
    MenuItem(id=6, name="Ice Cream", price=Decimal("3.75"), category="Desserts"),
]


def default_catalog() -> Catalog:
    return Catalog(items=DEFAULT_MENU_ITEMS)
