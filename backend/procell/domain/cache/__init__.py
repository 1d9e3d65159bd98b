"""
Cache Domain Module

Entities, value objects and storage interfaces for the expiring caches.
"""

from .entities import CacheEntry
from .repository_interfaces import DurableStore
from .value_objects import CacheEntryStatus, CacheKey, CacheStats, TTL

__all__ = [
    "CacheEntry",
    "CacheEntryStatus",
    "CacheKey",
    "CacheStats",
    "DurableStore",
    "TTL",
]
