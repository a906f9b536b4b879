"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from src.infrastructure.config.settings import (
    ObservabilitySettings,
    TelemetrySettings,
    get_settings,
    reset_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("TELEMETRY_BACKEND", "TELEMETRY_URL", "TELEMETRY_INSECURE"):
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.telemetry.backend == "cimi"
        assert settings.telemetry.url == "https://localhost:10443/api"
        assert settings.telemetry.insecure is False
        assert settings.observability.service_name == "sla-monitor"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TELEMETRY_URL", "https://cimi:443/api")
        monkeypatch.setenv("TELEMETRY_AUTH_TOKEN", "user/admin")
        monkeypatch.setenv("TELEMETRY_INSECURE", "true")
        monkeypatch.setenv("OTEL_LOG_LEVEL", "DEBUG")

        settings = get_settings()

        assert settings.telemetry.url == "https://cimi:443/api"
        assert settings.telemetry.auth_token == "user/admin"
        assert settings.telemetry.insecure is True
        assert settings.observability.log_level == "DEBUG"

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            TelemetrySettings(backend="prometheus")

    def test_log_level_is_normalized(self):
        assert ObservabilitySettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            ObservabilitySettings(log_level="verbose")

    def test_invalid_retry_attempts(self):
        with pytest.raises(ValidationError):
            TelemetrySettings(retry_attempts=0)

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            TelemetrySettings(timeout_seconds=0)
