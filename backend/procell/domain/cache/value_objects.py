"""
Cache Value Objects

Immutable value objects for the cache domain.
Provides type safety and validation for keys, expirations and statistics.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from ...constants import DEFAULT_DURABLE_TTL_MS, DEFAULT_MEMORY_TTL_MS, MAX_TTL_MS


class CacheEntryStatus(str, Enum):
    """Cache entry status enumeration."""

    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True)
class CacheKey:
    """
    Immutable cache key value object.

    Enforces key naming conventions and provides validation.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate cache key format."""
        if not self.value:
            raise ValueError("Cache key cannot be empty")

        if len(self.value) > 250:
            raise ValueError("Cache key too long (max 250 characters)")

        if any(char.isspace() for char in self.value):
            raise ValueError("Cache key cannot contain whitespace")

    def namespaced(self, prefix: str) -> str:
        """Key as stored under a durable-store namespace."""
        return f"{prefix}{self.value}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TTL:
    """
    Time To Live value object for cache expiration.

    Stored in milliseconds, the unit used by configuration.
    """

    value_ms: int

    def __post_init__(self) -> None:
        """Validate TTL value."""
        if self.value_ms <= 0:
            raise ValueError("TTL must be positive")
        if self.value_ms > MAX_TTL_MS:
            raise ValueError("TTL too large (max 1 year)")

    @classmethod
    def milliseconds(cls, milliseconds: int) -> "TTL":
        """Create TTL from milliseconds."""
        return cls(int(milliseconds))

    @classmethod
    def seconds(cls, seconds: float) -> "TTL":
        """Create TTL from seconds."""
        return cls(int(seconds * 1000))

    @classmethod
    def minutes(cls, minutes: float) -> "TTL":
        """Create TTL from minutes."""
        return cls(int(minutes * 60 * 1000))

    @classmethod
    def hours(cls, hours: float) -> "TTL":
        """Create TTL from hours."""
        return cls(int(hours * 3600 * 1000))

    @classmethod
    def days(cls, days: float) -> "TTL":
        """Create TTL from days."""
        return cls(int(days * 86400 * 1000))

    # Presets
    @classmethod
    def memory_default(cls) -> "TTL":
        """In-process tier TTL (5 minutes)."""
        return cls(DEFAULT_MEMORY_TTL_MS)

    @classmethod
    def durable_default(cls) -> "TTL":
        """Durable tier TTL (24 hours)."""
        return cls(DEFAULT_DURABLE_TTL_MS)

    @property
    def total_seconds(self) -> float:
        return self.value_ms / 1000

    def as_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.value_ms)

    def __str__(self) -> str:
        return f"{self.value_ms}ms"


class CacheStats(BaseModel):
    """Diagnostic snapshot of a cache tier."""

    size: int = Field(..., description="Total number of stored entries")
    expired: int = Field(
        ..., description="Entries past their expiry that have not been swept yet"
    )
    keys: List[str] = Field(
        default_factory=list, description="All stored keys, expired ones included"
    )

    @field_validator("size", "expired")
    @classmethod
    def validate_counts(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Cache counts cannot be negative")
        return v
