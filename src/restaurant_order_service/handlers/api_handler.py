"""FastAPI application for the menu and order endpoints."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from restaurant_order_service.models.cart_models import (
    OrderStatusEnum,
    OrderSubmissionResult,
    SubmittedOrder,
)
from restaurant_order_service.models.menu_models import Catalog, MenuItem
from restaurant_order_service.services.catalog_client import CatalogClient
from restaurant_order_service.services.order_intake_service import OrderIntakeService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class StatusUpdateRequest(BaseModel):
    """Body of an order status change."""

    status: OrderStatusEnum


def _order_response(result: OrderSubmissionResult) -> JSONResponse:
    return JSONResponse(
        status_code=201 if result.success else 400,
        content=result.to_response(),
    )


def create_app(
    catalog: Catalog,
    intake_service: OrderIntakeService,
    catalog_client: CatalogClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        catalog: Read-only menu catalog served at /api/menu
        intake_service: Service that validates and records submitted orders
        catalog_client: Optional catalog provider. When given, its menu replaces
            ``catalog`` at startup; ``catalog`` stays in use if the fetch fails.

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if catalog_client is not None:
            remote_catalog = await catalog_client.get_catalog()
            if remote_catalog is None:
                logger.warning(
                    f"Catalog provider unavailable, serving {len(app.state.catalog)} local items"
                )
            else:
                app.state.catalog = remote_catalog
                logger.info(f"Loaded {len(remote_catalog)} menu items from catalog provider")
        yield

    app = FastAPI(
        title="Restaurant Order Service API",
        description="Menu catalog and order submission endpoints",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.catalog = catalog
    app.state.intake_service = intake_service

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/api/menu", response_model=list[MenuItem], tags=["Menu"])
    async def get_menu() -> list[MenuItem]:
        """Return every menu item in display order."""
        return list(app.state.catalog.items)

    @app.get("/api/menu/categories", response_model=list[str], tags=["Menu"])
    async def get_categories() -> list[str]:
        """Return the unique menu categories in display order."""
        categories: list[str] = app.state.catalog.categories
        return categories

    @app.post("/api/orders", tags=["Orders"])
    async def submit_order(request: Request) -> JSONResponse:
        """Accept an order payload.

        Body: ``{"items": [{id, name, price, category, quantity}], "total": number}``

        Returns:
            201 with ``{success, orderId, estimatedTime}``, or 400 with
            ``{success: false, error}`` for empty or malformed bodies
        """
        if request.headers.get("X-API-Key"):
            logger.debug("Order request included an X-API-Key header")

        body = await request.body()
        if not body:
            return _order_response(
                OrderSubmissionResult(
                    success=False, error="Request body is missing for POST /api/orders."
                )
            )

        try:
            payload = json.loads(body)
        except ValueError as e:
            logger.error(f"Malformed order body: {e}")
            return _order_response(
                OrderSubmissionResult(success=False, error=f"Malformed order body: {e}")
            )

        result = app.state.intake_service.accept_order(payload)
        return _order_response(result)

    @app.get("/api/orders", response_model=list[SubmittedOrder], tags=["Orders"])
    async def list_orders(status: OrderStatusEnum | None = None) -> list[SubmittedOrder]:
        """List accepted orders, optionally filtered by status."""
        orders: list[SubmittedOrder] = app.state.intake_service.list_orders(status=status)
        return orders

    @app.get("/api/orders/{order_id}", response_model=SubmittedOrder, tags=["Orders"])
    async def get_order(order_id: str) -> SubmittedOrder:
        """Look up an accepted order.

        Raises:
            HTTPException: 404 if the order does not exist
        """
        order: SubmittedOrder | None = app.state.intake_service.get_order(order_id)
        if order is None:
            raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
        return order

    @app.patch("/api/orders/{order_id}", response_model=SubmittedOrder, tags=["Orders"])
    async def update_order_status(order_id: str, update: StatusUpdateRequest) -> SubmittedOrder:
        """Move an order to a new status.

        Raises:
            HTTPException: 404 if the order does not exist
        """
        order: SubmittedOrder | None = app.state.intake_service.update_status(
            order_id, update.status
        )
        if order is None:
            raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
        return order

    return app
