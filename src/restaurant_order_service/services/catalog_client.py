"""Client for fetching the menu catalog from the catalog provider."""

import logging
from decimal import Decimal

import httpx
from pydantic import ValidationError as PydanticValidationError

from restaurant_order_service.models.menu_models import Catalog, MenuItem

logger = logging.getLogger(__name__)


class CatalogClient:
    """HTTP client for the catalog provider's ``/api/menu`` endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the catalog client.

        Args:
            base_url: Base URL of the catalog provider (e.g., "http://localhost:8001")
            api_key: API key sent in the X-API-Key header
            transport: Optional httpx transport (e.g. httpx.ASGITransport for in-process apps)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.transport = transport

    async def get_catalog(self) -> Catalog | None:
        """Fetch the menu and build a read-only catalog.

        The endpoint returns a JSON list of ``{id, name, price, category}``.

        Returns:
            Catalog (possibly empty), or None on HTTP, network or data errors
        """
        url = f"{self.base_url}/api/menu"
        headers = {"X-API-Key": self.api_key}

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                data = response.json()

                items = []
                for item_data in data:
                    # Convert price to Decimal via str to avoid float artifacts
                    item_data["price"] = Decimal(str(item_data["price"]))
                    items.append(MenuItem(**item_data))

                return Catalog(items=items)

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error(f"Failed to fetch menu from {url}: {e}")
            return None
        except (KeyError, TypeError, ArithmeticError, PydanticValidationError) as e:
            logger.error(f"Catalog provider returned malformed menu data: {e}")
            return None
