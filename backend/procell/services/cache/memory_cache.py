"""
In-Process Expiring Cache

Map of string keys to cache entries with per-entry TTL.
Expired entries are removed lazily on read and eagerly by a periodic
sweep that the owning application starts and stops.
"""

import asyncio
import logging
from typing import Dict, Generic, Optional, TypeVar

from ...constants import DEFAULT_SWEEP_INTERVAL_SECONDS
from ...domain.cache.entities import CacheEntry, Clock, utc_now
from ...domain.cache.value_objects import TTL, CacheStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MemoryCache(Generic[T]):
    """
    In-process cache tier.

    Unbounded in entry count; only time-based expiry applies. Not
    namespaced: any holder of the instance may read or clear any key.
    """

    def __init__(
        self,
        default_ttl: Optional[TTL] = None,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Clock = utc_now,
    ):
        if sweep_interval_seconds <= 0:
            raise ValueError("Sweep interval must be positive")
        self.default_ttl = default_ttl or TTL.memory_default()
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._sweep_task: Optional[asyncio.Task] = None

    def set(self, key: str, value: T, ttl: Optional[TTL] = None) -> None:
        """Insert or overwrite ``key``; expires ``ttl`` from now."""
        self._entries[key] = CacheEntry.create(
            value, ttl or self.default_ttl, self._clock()
        )

    def get(self, key: str) -> Optional[T]:
        """Return the live value for ``key``, dropping it if expired."""
        entry = self._live_entry(key)
        return entry.value if entry else None

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """Remove every expired entry; returns how many were removed."""
        now = self._clock()
        expired_keys = [
            key for key, entry in self._entries.items() if entry.is_expired(now)
        ]
        for key in expired_keys:
            del self._entries[key]

        if expired_keys:
            logger.debug(
                f"Swept {len(expired_keys)} expired cache entries",
                extra={"removed": len(expired_keys), "remaining": len(self._entries)},
            )
        return len(expired_keys)

    def get_stats(self) -> CacheStats:
        """Snapshot of the tier; performs no lazy deletion."""
        now = self._clock()
        expired = sum(1 for entry in self._entries.values() if entry.is_expired(now))
        return CacheStats(
            size=len(self._entries), expired=expired, keys=list(self._entries)
        )

    def __len__(self) -> int:
        return len(self._entries)

    def _live_entry(self, key: str) -> Optional[CacheEntry[T]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    # Sweeper lifecycle

    @property
    def sweeper_running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    def start_sweeper(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.sweeper_running:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info(
            "Cache sweeper started",
            extra={"interval_seconds": self.sweep_interval_seconds},
        )

    async def stop_sweeper(self) -> None:
        """Cancel the periodic sweep and wait for it to finish."""
        if self._sweep_task is None:
            return

        self._sweep_task.cancel()
        try:
            await self._sweep_task
        except asyncio.CancelledError:
            pass
        self._sweep_task = None
        logger.info("Cache sweeper stopped")

    async def _sweep_loop(self) -> None:
        """Background sweep loop."""
        while True:
            try:
                await asyncio.sleep(self.sweep_interval_seconds)
                self.cleanup()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Cache sweep error: {e}", exc_info=True)
