"""
Durable Expiring Cache

Cache tier persisted to a string-keyed durable store under a key prefix.
Entries survive process restarts; expiry is enforced lazily on read.

Caching here is best-effort: storage and serialization failures are
logged as warnings and never reach the caller.
"""

import asyncio
import logging
from typing import Callable, Generic, List, Optional, TypeVar

from ...constants import DEFAULT_DURABLE_PREFIX
from ...domain.cache.entities import CacheEntry, Clock, utc_now
from ...domain.cache.repository_interfaces import DurableStore
from ...domain.cache.value_objects import TTL, CacheStats
from ...infrastructure.storage.exceptions import StorageException

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class DurableCache(Generic[T]):
    """
    Durable cache tier over a ``DurableStore``.

    Owns only keys starting with ``prefix``; other data in the same store
    is never read, modified or counted.
    """

    def __init__(
        self,
        store: DurableStore,
        prefix: str = DEFAULT_DURABLE_PREFIX,
        default_ttl: Optional[TTL] = None,
        clock: Clock = utc_now,
    ):
        if not prefix:
            raise ValueError("Durable cache prefix cannot be empty")
        self.store = store
        self.prefix = prefix
        self.default_ttl = default_ttl or TTL.durable_default()
        self._clock = clock

    def _storage_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def set(self, key: str, value: T, ttl: Optional[TTL] = None) -> None:
        """Persist ``value``; dropped with a warning if the store rejects it."""
        entry = CacheEntry.create(value, ttl or self.default_ttl, self._clock())
        try:
            self.store.set_item(self._storage_key(key), entry.to_storage())
        except (TypeError, ValueError) as e:
            logger.warning(
                f"Failed to serialize durable cache item '{key}': {e}",
                extra={"key": key},
            )
            self.delete(key)
        except StorageException as e:
            logger.warning(
                f"Failed to set durable cache item '{key}': {e.message}",
                extra={"key": key, "error_code": e.error_code},
            )
            # a failed overwrite must not leave the previous value readable
            self.delete(key)

    def get(self, key: str) -> Optional[T]:
        """Return the live value or None; expired and corrupt entries are removed."""
        storage_key = self._storage_key(key)
        try:
            raw = self.store.get_item(storage_key)
        except StorageException as e:
            logger.warning(
                f"Failed to read durable cache item '{key}': {e.message}",
                extra={"key": key, "error_code": e.error_code},
            )
            return None

        if raw is None:
            return None

        try:
            entry = CacheEntry.from_storage(raw)
        except ValueError as e:
            logger.warning(
                f"Discarding corrupt durable cache item '{key}': {e}",
                extra={"key": key},
            )
            self.delete(key)
            return None

        if entry.is_expired(self._clock()):
            self.delete(key)
            return None

        return entry.value

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        """Remove ``key``; True if the store held it."""
        try:
            return bool(self.store.remove_item(self._storage_key(key)))
        except StorageException as e:
            logger.warning(
                f"Failed to delete durable cache item '{key}': {e.message}",
                extra={"key": key, "error_code": e.error_code},
            )
            return False

    def clear(self) -> None:
        """Remove every key under this cache's prefix."""
        for key in self.keys():
            self.delete(key)

    def cleanup(self) -> None:
        """Best-effort scan that drops expired or corrupt entries."""
        for key in self.keys():
            self.get(key)

    def keys(self) -> List[str]:
        """Cache keys (prefix stripped) currently present in the store."""
        try:
            stored = self.store.keys(self.prefix)
        except StorageException as e:
            logger.warning(f"Failed to list durable cache keys: {e.message}")
            return []
        return [k[len(self.prefix):] for k in stored if k.startswith(self.prefix)]

    def get_stats(self) -> CacheStats:
        """Snapshot of the tier; performs no lazy deletion."""
        now = self._clock()
        keys = self.keys()
        expired = 0
        for key in keys:
            try:
                raw = self.store.get_item(self._storage_key(key))
                if raw is not None and CacheEntry.from_storage(raw).is_expired(now):
                    expired += 1
            except (StorageException, ValueError):
                expired += 1
        return CacheStats(size=len(keys), expired=expired, keys=keys)

    async def call(self, method: Callable[..., R], *args) -> R:
        """
        Invoke a method of this tier from async code.

        Runs in a worker thread when the store blocks on I/O so the event
        loop keeps serving other requests; inline otherwise.
        """
        if self.store.blocking:
            return await asyncio.to_thread(method, *args)
        return method(*args)
