"""
Durable Storage Infrastructure

String-keyed durable stores backing the durable cache tier.
"""

from .exceptions import (
    StorageConnectionException,
    StorageException,
    StorageOperationException,
    StorageQuotaExceededException,
)
from .factory import create_durable_store
from .memory_store import InMemoryStore
from .redis_store import RedisStore

__all__ = [
    "InMemoryStore",
    "RedisStore",
    "create_durable_store",
    "StorageException",
    "StorageConnectionException",
    "StorageOperationException",
    "StorageQuotaExceededException",
]
