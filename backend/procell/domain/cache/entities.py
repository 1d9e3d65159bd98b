"""
Cache Domain Entities

Core cache entry entity shared by the in-process and durable tiers.
Encapsulates expiry rules and the durable storage representation.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

from .value_objects import TTL, CacheEntryStatus

T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock used by all caches."""
    return datetime.now(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    return int(round(moment.timestamp() * 1000))


def from_epoch_ms(value: float) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


@dataclass
class CacheEntry(Generic[T]):
    """
    Cache entry entity.

    The value is owned by the cache once inserted; no defensive copy is made.
    An entry is live while ``now < expires_at``.
    """

    value: T
    created_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        if self.expires_at < self.created_at:
            raise ValueError("Cache entry cannot expire before it was created")

    @classmethod
    def create(cls, value: T, ttl: TTL, now: datetime) -> "CacheEntry[T]":
        """Create new cache entry expiring ``ttl`` after ``now``."""
        return cls(value=value, created_at=now, expires_at=now + ttl.as_timedelta())

    def is_expired(self, now: datetime) -> bool:
        """Check if cache entry is expired at ``now``."""
        return now >= self.expires_at

    def get_status(self, now: datetime) -> CacheEntryStatus:
        if self.is_expired(now):
            return CacheEntryStatus.EXPIRED
        return CacheEntryStatus.ACTIVE

    def remaining_ms(self, now: datetime) -> int:
        """Milliseconds left before expiry (0 once expired)."""
        remaining = (self.expires_at - now).total_seconds() * 1000
        return max(0, int(remaining))

    def to_storage(self) -> str:
        """
        Serialize entry for a string-keyed durable store.

        Raises:
            TypeError: If the value is not JSON serializable
        """
        return json.dumps(
            {
                "data": self.value,
                "timestamp": to_epoch_ms(self.created_at),
                "expiry": to_epoch_ms(self.expires_at),
            },
            ensure_ascii=False,
        )

    @classmethod
    def from_storage(cls, raw: str) -> "CacheEntry[Any]":
        """
        Parse an entry written by ``to_storage``.

        Raises:
            ValueError: If the stored string is not a valid entry
        """
        try:
            payload = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Stored cache entry is not valid JSON: {e}") from e

        if not isinstance(payload, dict) or "data" not in payload:
            raise ValueError("Stored cache entry is missing its data")

        expiry = payload.get("expiry")
        if not isinstance(expiry, (int, float)) or isinstance(expiry, bool):
            raise ValueError("Stored cache entry has no valid expiry")

        # Infinity and huge numbers are valid JSON but not valid instants
        try:
            expires_at = from_epoch_ms(expiry)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError("Stored cache entry has no valid expiry") from e

        created_at = expires_at
        timestamp = payload.get("timestamp")
        if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
            try:
                created_at = min(from_epoch_ms(timestamp), expires_at)
            except (OverflowError, OSError, ValueError):
                created_at = expires_at

        return cls(value=payload["data"], created_at=created_at, expires_at=expires_at)
