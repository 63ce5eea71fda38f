"""Main application entry point for the restaurant order service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import json
import logging
import os
from decimal import Decimal
from pathlib import Path

from fastapi import FastAPI

from restaurant_order_service.adapters.base_adapter import OrderSubmitter
from restaurant_order_service.adapters.http_order_submitter import HttpOrderSubmitter
from restaurant_order_service.adapters.in_memory_order_submitter import InMemoryOrderSubmitter
from restaurant_order_service.data.menu_data import default_catalog
from restaurant_order_service.handlers.api_handler import create_app
from restaurant_order_service.models.menu_models import Catalog, MenuItem
from restaurant_order_service.observability import configure_logging, setup_observability
from restaurant_order_service.repositories.order_repository import InMemoryOrderRepository
from restaurant_order_service.services.cart_service import CartService
from restaurant_order_service.services.catalog_client import CatalogClient
from restaurant_order_service.services.checkout_service import CheckoutService
from restaurant_order_service.services.notice_service import NoticeService
from restaurant_order_service.services.order_intake_service import OrderIntakeService

logger = logging.getLogger(__name__)


def create_catalog() -> Catalog:
    """Build the menu catalog.

    Loads a JSON list of ``{id, name, price, category}`` from CATALOG_FILE
    when set, otherwise uses the built-in default menu.

    Returns:
        Read-only catalog

    Raises:
        ValueError: If the catalog file cannot be parsed
    """
    catalog_file = os.getenv("CATALOG_FILE")
    if not catalog_file:
        logger.info("Using built-in default menu")
        return default_catalog()

    try:
        data = json.loads(Path(catalog_file).read_text())
        items = [
            MenuItem(**{**item, "price": Decimal(str(item["price"]))}) for item in data
        ]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ValueError(f"Could not load catalog from {catalog_file}: {e}") from e

    logger.info(f"Loaded {len(items)} menu items from {catalog_file}")
    return Catalog(items=items)


def create_catalog_client() -> CatalogClient | None:
    """Create a catalog provider client from environment variables.

    CATALOG_API_BASE_URL enables fetching the menu from a remote provider at
    startup; CATALOG_API_KEY is sent as its X-API-Key header.

    Returns:
        CatalogClient, or None when no provider is configured
    """
    base_url = os.getenv("CATALOG_API_BASE_URL")
    if not base_url:
        return None

    logger.info(f"Fetching menu from catalog provider at {base_url}")
    return CatalogClient(base_url=base_url, api_key=os.getenv("CATALOG_API_KEY", ""))


def create_order_submitter(intake_service: OrderIntakeService) -> OrderSubmitter:
    """Choose the order submitter from environment variables.

    ORDER_API_BASE_URL selects the HTTP submitter; without it orders go
    straight to the local intake service.

    Args:
        intake_service: Local intake service used by the in-memory submitter

    Returns:
        Configured order submitter
    """
    base_url = os.getenv("ORDER_API_BASE_URL")
    if base_url:
        logger.info(f"Submitting orders over HTTP to {base_url}")
        return HttpOrderSubmitter(base_url=base_url, api_key=os.getenv("ORDER_API_KEY"))

    logger.info("Submitting orders to the in-process intake service")
    return InMemoryOrderSubmitter(intake_service=intake_service)


def create_checkout_service(intake_service: OrderIntakeService) -> CheckoutService:
    """Create a checkout service configured from environment variables.

    Args:
        intake_service: Local intake service for in-process submission

    Returns:
        Configured CheckoutService
    """
    minimum_order_value = Decimal(os.getenv("MINIMUM_ORDER_VALUE", "10"))
    retry_delay = float(os.getenv("RETRY_DELAY_SECONDS", "2"))

    return CheckoutService(
        submitter=create_order_submitter(intake_service),
        minimum_order_value=minimum_order_value,
        retry_delay_seconds=retry_delay,
    )


def create_cart_service(catalog: Catalog) -> CartService:
    """Create a cart service for a display layer session.

    DEAL_ITEM_ID names the menu item on offer; NOTICE_TTL_SECONDS controls
    how long error notices stay visible.

    Args:
        catalog: Menu catalog the cart draws from

    Returns:
        Configured CartService
    """
    deal_item_id = os.getenv("DEAL_ITEM_ID")
    notice_service = NoticeService(ttl_seconds=float(os.getenv("NOTICE_TTL_SECONDS", "3")))

    return CartService(
        catalog=catalog,
        notice_service=notice_service,
        deal_item_id=int(deal_item_id) if deal_item_id else None,
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Builds the menu catalog (and the optional remote catalog client)
    3. Creates the order repository and intake service
    4. Creates FastAPI app with menu and order endpoints
    5. Optionally sets up OpenTelemetry

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing restaurant order service...")

    catalog = create_catalog()
    order_repository = InMemoryOrderRepository()
    intake_service = OrderIntakeService(
        order_repository=order_repository,
        estimated_time=os.getenv("ESTIMATED_PREP_TIME", "25 minutes"),
    )

    app = create_app(
        catalog=catalog,
        intake_service=intake_service,
        catalog_client=create_catalog_client(),
    )

    if os.getenv("ENABLE_OTEL", "false").lower() == "true":
        setup_observability(app)

    logger.info(f"Restaurant order service initialized with {len(catalog)} menu items")

    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
