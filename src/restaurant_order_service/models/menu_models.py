"""Menu data models.

These models represent the read-only catalog served to the ordering UI.
The catalog is created once at startup and never mutated afterwards.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

ALL_CATEGORIES = "all"


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique, stable identifier for the menu item")
    name: str = Field(..., description="Display name")
    price: Decimal = Field(..., description="Unit price", ge=0)
    category: str = Field(..., description="Category label (not unique)")

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        """Prices travel as JSON numbers on the wire."""
        return float(price)


class Catalog(BaseModel):
    """Ordered, read-only list of menu items."""

    model_config = ConfigDict(frozen=True)

    items: tuple[MenuItem, ...] = Field(default=(), description="Menu items in display order")

    def get(self, item_id: int) -> MenuItem | None:
        """Look up a menu item by identifier.

        Args:
            item_id: The menu item identifier

        Returns:
            MenuItem if found, None otherwise
        """
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @property
    def categories(self) -> list[str]:
        """Unique category names in first-seen order."""
        return list(dict.fromkeys(item.category for item in self.items))

    def filter_by_category(self, category: str) -> list[MenuItem]:
        """Return the items in a category.

        Args:
            category: Category label, or "all" for every item

        Returns:
            Matching items in catalog order, empty list for unknown categories
        """
        if category == ALL_CATEGORIES:
            return list(self.items)
        return [item for item in self.items if item.category == category]

    def __len__(self) -> int:
        return len(self.items)
