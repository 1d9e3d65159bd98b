"""
Health check endpoints for the ProCell API.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ...core.config import Settings
from ..dependencies import get_app_settings, get_cache_manager
from ...services.cache import CacheManager

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    cache_manager: CacheManager = Depends(get_cache_manager),
) -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns a simple health status for load balancers and monitoring systems.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.OTEL_SERVICE_NAME,
        "version": settings.OTEL_SERVICE_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": {
            "sweeper_running": cache_manager.memory.sweeper_running,
            "durable_backend": settings.DURABLE_STORE_BACKEND,
        },
        "telemetry": request.app.state.otel_manager.get_telemetry_health(),
    }
