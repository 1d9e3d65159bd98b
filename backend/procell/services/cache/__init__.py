"""
Cache Services

In-process and durable expiring caches, the read-through cache manager
and the image preload cache.
"""

from .cache_manager import CacheManager
from .durable_cache import DurableCache
from .exceptions import ImageLoadException
from .image_cache import (
    HttpImageLoader,
    ImageCache,
    LoadedImage,
    optimized_image_url,
)
from .memory_cache import MemoryCache

__all__ = [
    "CacheManager",
    "DurableCache",
    "HttpImageLoader",
    "ImageCache",
    "ImageLoadException",
    "LoadedImage",
    "MemoryCache",
    "optimized_image_url",
]
