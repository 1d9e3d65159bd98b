"""
ProCell Backend - Main FastAPI Application

Host application owning the cache services:
- One in-process cache whose sweeper runs for the app's lifetime
- One durable cache over the configured store (Redis, or memory in tests)
- The read-through cache manager and the image preload cache
- Cached catalog reads from the storefront catalog API
- Checkout summary endpoint
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints.cache import router as cache_router
from .api.endpoints.catalog import router as catalog_router
from .api.endpoints.checkout import router as checkout_router
from .api.endpoints.health import router as health_router
from .api.endpoints.images import router as images_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.telemetry import OpenTelemetryManager
from .domain.cache.repository_interfaces import DurableStore
from .infrastructure.storage import create_durable_store
from .monitoring import CacheMetrics
from .services.cache import (
    CacheManager,
    DurableCache,
    HttpImageLoader,
    ImageCache,
    MemoryCache,
)
from .services.cache.image_cache import ImageLoader
from .services.catalog import CatalogClient

logger = structlog.get_logger()


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DurableStore] = None,
    image_loader: Optional[ImageLoader] = None,
    catalog_client: Optional[CatalogClient] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings to use instead of the environment-derived ones
        store: Durable store to use instead of the configured backend
        image_loader: Image loader to use instead of the HTTP loader
        catalog_client: Catalog client to use instead of one built from
            ``CATALOG_API_URL``
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, json_output=not settings.is_development)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create cache services on startup and tear them down on shutdown."""
        durable_store = store or create_durable_store(settings)
        memory = MemoryCache(
            default_ttl=settings.memory_ttl,
            sweep_interval_seconds=settings.CACHE_SWEEP_INTERVAL_SECONDS,
        )
        durable = DurableCache(
            durable_store,
            prefix=settings.DURABLE_CACHE_PREFIX,
            default_ttl=settings.durable_ttl,
        )
        http_loader = None
        if image_loader is None:
            http_loader = HttpImageLoader(
                timeout_seconds=settings.IMAGE_LOAD_TIMEOUT_SECONDS
            )

        app.state.cache_manager = CacheManager(
            memory,
            durable,
            default_ttl=settings.memory_ttl,
            single_flight=settings.CACHE_SINGLE_FLIGHT,
            metrics=app.state.cache_metrics,
        )
        app.state.image_cache = ImageCache(image_loader or http_loader)

        owned_catalog = None
        if catalog_client is None and settings.CATALOG_API_URL:
            owned_catalog = CatalogClient(
                settings.CATALOG_API_URL,
                api_key=settings.CATALOG_API_KEY,
                timeout_seconds=settings.CATALOG_TIMEOUT_SECONDS,
            )
        app.state.catalog_client = catalog_client or owned_catalog

        memory.start_sweeper()
        logger.info(
            "ProCell API started",
            environment=settings.ENVIRONMENT,
            durable_backend=settings.DURABLE_STORE_BACKEND,
            sweep_interval_seconds=settings.CACHE_SWEEP_INTERVAL_SECONDS,
            single_flight=settings.CACHE_SINGLE_FLIGHT,
            catalog_enabled=app.state.catalog_client is not None,
        )

        yield

        logger.info("Shutting down ProCell API")
        try:
            await memory.stop_sweeper()
            if http_loader is not None:
                await http_loader.aclose()
            if owned_catalog is not None:
                await owned_catalog.aclose()
            durable_store.close()
            logger.info("Application shutdown completed")
        except Exception as e:
            logger.error("Error during application shutdown", error=str(e))
        finally:
            app.state.otel_manager.shutdown()

    app = FastAPI(
        title="ProCell API",
        description="Storefront caching and checkout services",
        version=settings.OTEL_SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.cache_metrics = CacheMetrics()
    app.state.otel_manager = OpenTelemetryManager(settings)
    app.state.otel_manager.initialize(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(cache_router)
    app.include_router(catalog_router)
    app.include_router(images_router)
    app.include_router(checkout_router)

    return app
