"""
Catalog endpoints.

Catalog tables change rarely, so reads go through the two-tier cache and
only a miss in both tiers reaches the upstream.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...services.cache import CacheManager
from ...services.catalog import CATALOG_RESOURCES, CatalogClient, CatalogException
from ..dependencies import get_cache_manager, get_catalog_client
from ..exceptions import CacheHTTPException

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("/{resource}")
async def get_catalog_resource(
    resource: str,
    cache_manager: CacheManager = Depends(get_cache_manager),
    catalog_client: Optional[CatalogClient] = Depends(get_catalog_client),
) -> Dict[str, Any]:
    """Rows of one catalog table, served from cache when possible."""
    if resource not in CATALOG_RESOURCES:
        raise CacheHTTPException(
            status_code=404,
            error_code="UNKNOWN_CATALOG_RESOURCE",
            message=f"Unknown catalog resource: {resource}",
            details={"resource": resource, "available": sorted(CATALOG_RESOURCES)},
        )
    if catalog_client is None:
        raise CacheHTTPException(
            status_code=503,
            error_code="CATALOG_NOT_CONFIGURED",
            message="Catalog upstream is not configured",
        )

    try:
        rows = await cache_manager.cached_call(
            f"catalog_{resource}", lambda: catalog_client.fetch(resource)
        )
    except CatalogException as e:
        raise CacheHTTPException(
            status_code=502,
            error_code=e.error_code,
            message=e.message,
            details=e.details,
        )

    return {"resource": resource, "count": len(rows), "items": rows}
