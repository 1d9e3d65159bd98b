"""
FastAPI dependencies.

Cache services are created once by the application lifespan and kept on
``app.state``; endpoints receive them through these providers.
"""

from typing import Optional

from fastapi import Request

from ..core.config import Settings
from ..monitoring import CacheMetrics
from ..services.cache import CacheManager, ImageCache
from ..services.catalog import CatalogClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache_manager(request: Request) -> CacheManager:
    return request.app.state.cache_manager


def get_image_cache(request: Request) -> ImageCache:
    return request.app.state.image_cache


def get_cache_metrics(request: Request) -> CacheMetrics:
    return request.app.state.cache_metrics


def get_catalog_client(request: Request) -> Optional[CatalogClient]:
    """The catalog client, or None when no catalog upstream is configured."""
    return request.app.state.catalog_client
