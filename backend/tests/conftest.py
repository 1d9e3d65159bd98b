"""
Main pytest configuration for all backend tests.

Fixtures and utilities for unit and API tests.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Set test environment variables before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

from procell.domain.cache.value_objects import TTL
from procell.infrastructure.storage import InMemoryStore
from procell.services.cache import CacheManager, DurableCache, MemoryCache


class FakeClock:
    """Manually advanced clock for deterministic expiry tests."""

    def __init__(self, initial: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self._value = initial

    def now(self) -> datetime:
        return self._value

    def advance(self, milliseconds: float) -> None:
        self._value += timedelta(milliseconds=milliseconds)


@pytest.fixture
def clock():
    """Provide a fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def memory_store():
    """Provide an empty in-memory durable store."""
    return InMemoryStore()


@pytest.fixture
def memory_cache(clock):
    """Provide an in-process cache driven by the fake clock."""
    return MemoryCache(default_ttl=TTL.seconds(1), clock=clock.now)


@pytest.fixture
def durable_cache(memory_store, clock):
    """Provide a durable cache over the in-memory store."""
    return DurableCache(memory_store, prefix="procell_", clock=clock.now)


@pytest.fixture
def cache_manager(memory_cache, durable_cache):
    """Provide a cache manager composing both tiers."""
    return CacheManager(memory_cache, durable_cache, default_ttl=TTL.minutes(5))


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "redis: marks tests as Redis-related")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
