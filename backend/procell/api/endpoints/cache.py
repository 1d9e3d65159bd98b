"""
Cache administration endpoints.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST

from ...domain.cache.value_objects import CacheKey
from ...monitoring import CacheMetrics
from ...services.cache import CacheManager
from ..dependencies import get_cache_manager, get_cache_metrics
from ..exceptions import CacheHTTPException

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


@router.get("/stats")
async def cache_stats(
    cache_manager: CacheManager = Depends(get_cache_manager),
) -> Dict[str, Any]:
    """Entry counts and keys for both cache tiers."""
    return await cache_manager.stats()


@router.get("/metrics")
async def cache_metrics(
    cache_manager: CacheManager = Depends(get_cache_manager),
    metrics: CacheMetrics = Depends(get_cache_metrics),
) -> PlainTextResponse:
    """Prometheus metrics for cache lookups and upstream fetches."""
    metrics.update_entries(await cache_manager.stats())
    return PlainTextResponse(metrics.export(), media_type=CONTENT_TYPE_LATEST)


@router.post("/cleanup")
async def cleanup_cache(
    cache_manager: CacheManager = Depends(get_cache_manager),
) -> Dict[str, Any]:
    """Run an immediate sweep of both tiers."""
    removed = await cache_manager.cleanup()
    return {"removed": removed, "stats": await cache_manager.stats()}


@router.delete("/{key}")
async def invalidate_key(
    key: str,
    cache_manager: CacheManager = Depends(get_cache_manager),
) -> Dict[str, Any]:
    """Remove a single key from both tiers."""
    try:
        cache_key = CacheKey(key)
    except ValueError as e:
        raise CacheHTTPException(
            status_code=400,
            error_code="INVALID_CACHE_KEY",
            message=str(e),
            details={"key": key},
        )

    removed = await cache_manager.invalidate(cache_key.value)
    logger.info(f"Invalidated cache key '{cache_key}'", extra={"removed": removed})
    return {"key": cache_key.value, "removed": removed}


@router.delete("")
async def clear_cache(
    cache_manager: CacheManager = Depends(get_cache_manager),
) -> Dict[str, Any]:
    """Drop every entry from both tiers."""
    await cache_manager.clear()
    logger.info("Cache cleared")
    return {"cleared": True}
