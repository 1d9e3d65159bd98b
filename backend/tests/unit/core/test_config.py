"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from procell.core.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ENVIRONMENT", "LOG_LEVEL", "DURABLE_STORE_BACKEND"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Test Settings defaults and validation."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.ENVIRONMENT == "development"
        assert settings.is_development
        assert settings.CACHE_DEFAULT_TTL_MS == 300_000
        assert settings.DURABLE_CACHE_DEFAULT_TTL_MS == 86_400_000
        assert settings.DURABLE_CACHE_PREFIX == "procell_"
        assert settings.CACHE_SWEEP_INTERVAL_SECONDS == 300
        assert settings.CACHE_SINGLE_FLIGHT is False
        assert settings.DURABLE_STORE_BACKEND == "redis"
        assert settings.OTEL_ENABLED is False

    def test_ttl_properties(self):
        settings = Settings(
            _env_file=None, CACHE_DEFAULT_TTL_MS=1000, DURABLE_CACHE_DEFAULT_TTL_MS=60_000
        )

        assert settings.memory_ttl.value_ms == 1000
        assert settings.durable_ttl.value_ms == 60_000

    def test_environment_variables_override(self, monkeypatch):
        monkeypatch.setenv("CACHE_SINGLE_FLIGHT", "true")
        monkeypatch.setenv("CACHE_SWEEP_INTERVAL_SECONDS", "30")

        settings = Settings(_env_file=None)

        assert settings.CACHE_SINGLE_FLIGHT is True
        assert settings.CACHE_SWEEP_INTERVAL_SECONDS == 30

    def test_invalid_environment(self):
        with pytest.raises(ValidationError, match="ENVIRONMENT must be one of"):
            Settings(_env_file=None, ENVIRONMENT="qa")

    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, LOG_LEVEL="warning").LOG_LEVEL == "WARNING"

    def test_store_backend_lowercased(self):
        assert Settings(_env_file=None, DURABLE_STORE_BACKEND="Redis").DURABLE_STORE_BACKEND == "redis"

    def test_invalid_store_backend(self):
        with pytest.raises(ValidationError, match="DURABLE_STORE_BACKEND"):
            Settings(_env_file=None, DURABLE_STORE_BACKEND="sqlite")

    @pytest.mark.parametrize(
        "field,value",
        [
            ("CACHE_DEFAULT_TTL_MS", 0),
            ("DURABLE_CACHE_DEFAULT_TTL_MS", -5),
            ("CACHE_SWEEP_INTERVAL_SECONDS", 0),
            ("DURABLE_CACHE_PREFIX", ""),
            ("DURABLE_STORE_MAX_BYTES", 0),
        ],
    )
    def test_invalid_cache_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_cors_origins_list(self):
        settings = Settings(
            _env_file=None, CORS_ORIGINS="https://shop.example.com, ,http://localhost:3000"
        )

        assert settings.cors_origins_list == [
            "https://shop.example.com",
            "http://localhost:3000",
        ]
