"""
Catalog Client

Reads storefront catalog tables from a PostgREST-style API. Results are
plain JSON rows, so they can be stored in either cache tier as-is.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .exceptions import CatalogException

logger = logging.getLogger(__name__)

CATALOG_RESOURCES = frozenset(
    {
        "products",
        "product_filter_categories",
        "product_photos",
        "payment_method_images",
        "maintenance_services",
        "reviews",
    }
)


class CatalogClient:
    """Fetches catalog resources with a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    def _headers(self) -> Dict[str, str]:
        if not self._api_key:
            return {}
        return {"apikey": self._api_key, "Authorization": f"Bearer {self._api_key}"}

    async def fetch(self, resource: str) -> List[Dict[str, Any]]:
        """
        Return every row of ``resource``.

        Raises:
            ValueError: If ``resource`` is not a catalog resource
            CatalogException: If the upstream fails or returns a non-list body
        """
        if resource not in CATALOG_RESOURCES:
            raise ValueError(f"Unknown catalog resource: {resource}")

        url = f"{self.base_url}/rest/v1/{resource}"
        try:
            response = await self._client.get(
                url, params={"select": "*"}, headers=self._headers()
            )
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise CatalogException(resource, original_error=e)

        if not isinstance(rows, list):
            raise CatalogException(
                resource, original_error=TypeError("Expected a list of rows")
            )

        logger.debug(
            f"Fetched {len(rows)} rows of catalog resource '{resource}'",
            extra={"resource": resource, "rows": len(rows)},
        )
        return rows

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
