"""
Cache Metrics Collector

Prometheus counters and histograms for the read-through cache. Each
collector owns its own registry so several applications (or tests) in
one process never collide on metric names.
"""

from typing import Any, Dict

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)


class CacheMetrics:
    """Prometheus metrics for one cache manager."""

    def __init__(self, namespace: str = "procell"):
        self.registry = CollectorRegistry()
        self._lookups_name = f"{namespace}_cache_lookups_total"

        self.prom_lookups_total = Counter(
            self._lookups_name,
            "Cached calls by the tier that answered them",
            ["tier"],
            registry=self.registry,
        )

        self.prom_fetch_errors_total = Counter(
            f"{namespace}_cache_fetch_errors_total",
            "Upstream fetches that raised",
            registry=self.registry,
        )

        self.prom_fetch_duration_seconds = Histogram(
            f"{namespace}_cache_fetch_duration_seconds",
            "Upstream fetch time in seconds",
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=self.registry,
        )

        self.prom_entries = Gauge(
            f"{namespace}_cache_entries",
            "Entries currently held per tier, expired included",
            ["tier"],
            registry=self.registry,
        )

        self.prom_expired_entries = Gauge(
            f"{namespace}_cache_expired_entries",
            "Expired entries not yet removed per tier",
            ["tier"],
            registry=self.registry,
        )

    def record_lookup(self, tier: str) -> None:
        self.prom_lookups_total.labels(tier=tier).inc()

    def record_fetch(self, duration_seconds: float, success: bool) -> None:
        self.prom_fetch_duration_seconds.observe(duration_seconds)
        if not success:
            self.prom_fetch_errors_total.inc()

    def update_entries(self, stats: Dict[str, Any]) -> None:
        """Refresh entry gauges from a ``CacheManager.stats()`` snapshot."""
        for tier in ("memory", "durable"):
            self.prom_entries.labels(tier=tier).set(stats[tier]["size"])
            self.prom_expired_entries.labels(tier=tier).set(stats[tier]["expired"])

    def lookup_count(self, tier: str) -> float:
        value = self.registry.get_sample_value(
            self._lookups_name, {"tier": tier}
        )
        return value or 0.0

    def export(self) -> bytes:
        """Metrics in the Prometheus text exposition format."""
        return generate_latest(self.registry)
