"""Cart service for handling user cart actions against a session cart."""

import logging

from restaurant_order_service.errors import NotFoundError
from restaurant_order_service.models.cart_models import Cart
from restaurant_order_service.models.menu_models import Catalog, MenuItem
from restaurant_order_service.observability.metrics import record_cart_action
from restaurant_order_service.services import cart_ledger
from restaurant_order_service.services.notice_service import NoticeService

logger = logging.getLogger(__name__)

DEFAULT_DEAL_MESSAGE = "Burger is our Deal of the Day! Enjoy this special offer!"


class CartService:
    """Service that applies user actions to a cart.

    Wraps the ledger operations for the display layer: lookup failures become
    notices instead of exceptions, and adding the "deal of the day" item logs
    the deal message.
    """

    def __init__(
        self,
        catalog: Catalog,
        notice_service: NoticeService,
        deal_item_id: int | None = None,
        deal_message: str = DEFAULT_DEAL_MESSAGE,
    ) -> None:
        """Initialize the CartService.

        Args:
            catalog: Read-only menu catalog
            notice_service: Where user-visible errors are queued
            deal_item_id: Menu item currently on offer, if any
            deal_message: Message logged when the deal item is added
        """
        self.catalog = catalog
        self.notice_service = notice_service
        self.deal_item_id = deal_item_id
        self.deal_message = deal_message

    def add_to_cart(self, cart: Cart, item_id: int | str) -> bool:
        """Add one unit of a menu item.

        Args:
            cart: The session cart
            item_id: Menu item identifier

        Returns:
            True if the item was added, False if it could not be found
        """
        try:
            cart_ledger.add_item(self.catalog, cart, item_id)
        except NotFoundError as e:
            self.notice_service.handle_error(e)
            record_cart_action("add", success=False)
            return False

        record_cart_action("add", success=True)
        if (
            self.deal_item_id is not None
            and cart_ledger.coerce_item_id(item_id) == self.deal_item_id
        ):
            logger.info(self.deal_message)
        return True

    def change_quantity(self, cart: Cart, item_id: int | str, delta: int) -> bool:
        """Change the quantity of a cart line.

        Args:
            cart: The session cart
            item_id: Menu item identifier of the line
            delta: Amount to add (negative to decrement)

        Returns:
            True if the cart was updated, False if the line does not exist
        """
        try:
            cart_ledger.update_quantity(cart, item_id, delta)
        except NotFoundError as e:
            self.notice_service.handle_error(e)
            record_cart_action("update", success=False)
            return False

        record_cart_action("update", success=True)
        return True

    def filter_menu(self, category: str) -> list[MenuItem]:
        """Return catalog items for a category ("all" for everything)."""
        return self.catalog.filter_by_category(category)
