"""
Durable store selection from settings.
"""

import logging

from ...core.config import Settings
from ...domain.cache.repository_interfaces import DurableStore
from .memory_store import InMemoryStore
from .redis_store import RedisStore

logger = logging.getLogger(__name__)


def create_durable_store(settings: Settings) -> DurableStore:
    """Build the durable store configured by ``DURABLE_STORE_BACKEND``."""
    if settings.DURABLE_STORE_BACKEND == "redis":
        logger.info("Using Redis durable store")
        return RedisStore(
            url=settings.REDIS_URL, socket_timeout=settings.REDIS_SOCKET_TIMEOUT
        )

    logger.warning(
        "Using in-memory durable store; cached entries will not survive a restart",
        extra={"max_bytes": settings.DURABLE_STORE_MAX_BYTES},
    )
    return InMemoryStore(max_bytes=settings.DURABLE_STORE_MAX_BYTES)
