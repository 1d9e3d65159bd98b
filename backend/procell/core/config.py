"""
ProCell Application Configuration

Configuration management with environment variable support.
Implements defaults and validation for cache and host settings.
"""

from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    DEFAULT_DURABLE_PREFIX,
    DEFAULT_DURABLE_TTL_MS,
    DEFAULT_MEMORY_TTL_MS,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    MAX_TTL_MS,
)
from ..domain.cache.value_objects import TTL

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation and defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Environment settings
    ENVIRONMENT: str = Field(
        default="development", description="Application environment"
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Cache configuration
    CACHE_DEFAULT_TTL_MS: int = Field(
        default=DEFAULT_MEMORY_TTL_MS,
        gt=0,
        le=MAX_TTL_MS,
        description="Default TTL for the in-process tier and cached calls",
    )
    DURABLE_CACHE_DEFAULT_TTL_MS: int = Field(
        default=DEFAULT_DURABLE_TTL_MS,
        gt=0,
        le=MAX_TTL_MS,
        description="Default TTL for direct writes to the durable tier",
    )
    DURABLE_CACHE_PREFIX: str = Field(
        default=DEFAULT_DURABLE_PREFIX,
        min_length=1,
        description="Namespace prepended to every durable store key",
    )
    CACHE_SWEEP_INTERVAL_SECONDS: float = Field(
        default=DEFAULT_SWEEP_INTERVAL_SECONDS,
        gt=0,
        description="Interval between sweeps of expired in-process entries",
    )
    CACHE_SINGLE_FLIGHT: bool = Field(
        default=False,
        description="Share one upstream fetch between concurrent misses for a key",
    )

    # Durable store configuration
    DURABLE_STORE_BACKEND: str = Field(
        default="redis",
        description="Durable store backend (redis, or memory for tests; memory "
        "entries are lost on restart)",
    )
    DURABLE_STORE_MAX_BYTES: Optional[int] = Field(
        default=None, gt=0, description="Byte quota for the in-memory store"
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    REDIS_SOCKET_TIMEOUT: float = Field(
        default=5.0, gt=0, le=60, description="Redis socket timeout in seconds"
    )

    # Image preloading
    IMAGE_LOAD_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, le=120, description="Timeout for a single image load"
    )

    # Catalog upstream
    CATALOG_API_URL: str = Field(
        default="", description="Base URL of the catalog REST API (empty disables it)"
    )
    CATALOG_API_KEY: str = Field(default="", description="Catalog API key")
    CATALOG_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, le=120, description="Timeout for a catalog request"
    )

    # API configuration
    API_HOST: str = Field(default="0.0.0.0", description="API server host")
    API_PORT: int = Field(default=8000, ge=1, le=65535, description="API server port")
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins (comma-separated)",
    )

    # OpenTelemetry configuration
    OTEL_ENABLED: bool = Field(default=False, description="Enable trace export")
    OTEL_SERVICE_NAME: str = Field(
        default="procell-api", description="OpenTelemetry service name"
    )
    OTEL_SERVICE_VERSION: str = Field(
        default="0.1.0", description="OpenTelemetry service version"
    )
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(
        default="",
        description="OTLP gRPC endpoint; console export when empty",
    )

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator("DURABLE_STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v):
        """Validate durable store backend."""
        allowed = ["memory", "redis"]
        if v.lower() not in allowed:
            raise ValueError(f"DURABLE_STORE_BACKEND must be one of: {allowed}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as list."""
        return [
            origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()
        ]

    @property
    def memory_ttl(self) -> TTL:
        return TTL.milliseconds(self.CACHE_DEFAULT_TTL_MS)

    @property
    def durable_ttl(self) -> TTL:
        return TTL.milliseconds(self.DURABLE_CACHE_DEFAULT_TTL_MS)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create global settings instance
settings = get_settings()
