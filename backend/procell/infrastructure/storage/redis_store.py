"""
Redis Durable Store

Redis-backed implementation of the durable store interface.
Uses a synchronous client; the store is marked blocking so async callers
run its operations in a worker thread.
"""

import logging
import re
from typing import List, Optional

import redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    TimeoutError as RedisTimeoutError,
    RedisError,
)

from ...domain.cache.repository_interfaces import DurableStore
from .exceptions import StorageConnectionException, StorageOperationException

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _match_pattern(prefix: str) -> str:
    """SCAN pattern matching keys that start with ``prefix`` literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"


class RedisStore(DurableStore):
    """
    Durable store over a Redis database.

    Keys are stored as plain strings; expiry is handled by the cache
    layer, not by Redis TTLs, so the store keeps the same semantics as
    any other backend.
    """

    blocking = True

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        url: str = "redis://localhost:6379/0",
        socket_timeout: float = 5.0,
        scan_count: int = 500,
    ):
        self.url = url
        self.scan_count = scan_count
        self._client = client or redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )

    def _raise(self, operation: str, key: Optional[str], error: RedisError):
        if isinstance(error, (RedisConnectionError, RedisTimeoutError)):
            raise StorageConnectionException(
                message=f"Redis unavailable during '{operation}'",
                url=self.url,
                original_error=error,
            )
        raise StorageOperationException(
            operation=operation, key=key, original_error=error
        )

    def get_item(self, key: str) -> Optional[str]:
        try:
            return self._client.get(key)
        except RedisError as e:
            self._raise("get", key, e)

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except RedisError as e:
            self._raise("set", key, e)

    def remove_item(self, key: str) -> bool:
        try:
            return self._client.delete(key) > 0
        except RedisError as e:
            self._raise("delete", key, e)

    def keys(self, prefix: str = "") -> List[str]:
        try:
            return list(
                self._client.scan_iter(
                    match=_match_pattern(prefix), count=self.scan_count
                )
            )
        except RedisError as e:
            self._raise("scan", None, e)

    def close(self) -> None:
        try:
            self._client.close()
            logger.info("Redis store closed")
        except RedisError as e:
            logger.warning(f"Error closing Redis store: {e}")
