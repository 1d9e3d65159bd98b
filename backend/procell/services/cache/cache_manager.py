"""
Cache Manager Service

Composes the in-process and durable tiers in front of an asynchronous
data source so repeated reads avoid redundant upstream fetches.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from opentelemetry import trace

from ...domain.cache.value_objects import TTL
from ...monitoring.cache_metrics import CacheMetrics
from .durable_cache import DurableCache
from .memory_cache import MemoryCache

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

T = TypeVar("T")

FetchFn = Callable[[], Awaitable[T]]


class CacheManager(Generic[T]):
    """
    Two-tier read-through cache.

    Lookup order is in-process tier, then durable tier, then ``fetch_fn``.
    A stored value of None is indistinguishable from a miss.

    With ``single_flight`` enabled, concurrent misses for the same key
    await one shared upstream call instead of each issuing their own.
    """

    def __init__(
        self,
        memory: MemoryCache[T],
        durable: DurableCache[T],
        default_ttl: Optional[TTL] = None,
        single_flight: bool = False,
        metrics: Optional[CacheMetrics] = None,
    ):
        self.memory = memory
        self.durable = durable
        self.default_ttl = default_ttl or TTL.memory_default()
        self.single_flight = single_flight
        self.metrics = metrics
        self._in_flight: Dict[str, "asyncio.Future[T]"] = {}

    async def cached_call(
        self, key: str, fetch_fn: FetchFn, ttl: Optional[TTL] = None
    ) -> T:
        """
        Return the cached value for ``key`` or fetch and cache it.

        Args:
            key: Cache key shared by both tiers
            fetch_fn: Asynchronous producer invoked only when both tiers miss
            ttl: Expiry applied to both tiers on a fetch or backfill

        Raises:
            Whatever ``fetch_fn`` raises; nothing is cached in that case
        """
        cache_ttl = ttl or self.default_ttl

        with tracer.start_as_current_span("cache_manager.cached_call") as span:
            span.set_attribute("cache.key", key)
            span.set_attribute("cache.ttl_ms", cache_ttl.value_ms)

            value = self.memory.get(key)
            if value is not None:
                self._record_tier(span, "memory")
                return value

            value = await self.durable.call(self.durable.get, key)
            if value is not None:
                self._record_tier(span, "durable")
                self.memory.set(key, value, cache_ttl)
                return value

            self._record_tier(span, "origin")
            if self.single_flight:
                return await self._shared_fetch(key, fetch_fn, cache_ttl)
            return await self._fetch_and_store(key, fetch_fn, cache_ttl)

    def _record_tier(self, span: trace.Span, tier: str) -> None:
        span.set_attribute("cache.tier", tier)
        if self.metrics:
            self.metrics.record_lookup(tier)

    async def _fetch_and_store(self, key: str, fetch_fn: FetchFn, ttl: TTL) -> T:
        start_time = time.perf_counter()
        try:
            value = await fetch_fn()
        except Exception as e:
            if self.metrics:
                self.metrics.record_fetch(time.perf_counter() - start_time, False)
            logger.error(
                f"Upstream fetch failed for cache key '{key}': {e}",
                extra={"key": key},
            )
            trace.get_current_span().record_exception(e)
            raise

        if self.metrics:
            self.metrics.record_fetch(time.perf_counter() - start_time, True)
        self.memory.set(key, value, ttl)
        await self.durable.call(self.durable.set, key, value, ttl)
        return value

    async def _shared_fetch(self, key: str, fetch_fn: FetchFn, ttl: TTL) -> T:
        pending = self._in_flight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_and_store(key, fetch_fn, ttl))
            self._in_flight[key] = pending

            def _release(done: "asyncio.Future[T]") -> None:
                if self._in_flight.get(key) is done:
                    del self._in_flight[key]

            pending.add_done_callback(_release)
        else:
            logger.debug(f"Joining in-flight fetch for cache key '{key}'")

        # a cancelled waiter must not cancel the fetch other callers share
        return await asyncio.shield(pending)

    def in_flight(self) -> int:
        """Number of shared fetches currently pending."""
        return len(self._in_flight)

    async def invalidate(self, key: str) -> bool:
        """Remove ``key`` from both tiers; True if either tier held it."""
        removed_memory = self.memory.delete(key)
        removed_durable = await self.durable.call(self.durable.delete, key)
        return removed_memory or removed_durable

    async def clear(self) -> None:
        self.memory.clear()
        await self.durable.call(self.durable.clear)

    async def cleanup(self) -> int:
        """Sweep both tiers; returns entries removed from the in-process tier."""
        removed = self.memory.cleanup()
        await self.durable.call(self.durable.cleanup)
        return removed

    async def stats(self) -> Dict[str, Any]:
        durable_stats = await self.durable.call(self.durable.get_stats)
        return {
            "memory": self.memory.get_stats().model_dump(),
            "durable": durable_stats.model_dump(),
            "in_flight": self.in_flight(),
            "single_flight": self.single_flight,
        }
