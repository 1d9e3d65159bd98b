"""
ProCell Cache Monitoring Module

Prometheus metrics for cache lookups and upstream fetches.
"""

from .cache_metrics import CacheMetrics

__all__ = ["CacheMetrics"]
