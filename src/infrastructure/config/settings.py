"""SLA monitor configuration using Pydantic Settings.

Every tunable of the monitor is read here, from the environment or a .env
file:

    TELEMETRY_BACKEND=cimi
    TELEMETRY_URL=https://cimi.example.org/api
    TELEMETRY_AUTH_TOKEN="user/admin group/admin"
    OTEL_LOG_LEVEL=DEBUG
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelemetrySettings(BaseSettings):
    """Where raw telemetry comes from and how to reach it."""

    model_config = SettingsConfigDict(env_prefix="TELEMETRY_", case_sensitive=False)

    backend: str = Field(
        default="cimi",
        pattern="^(cimi|memory)$",
        description="Telemetry repository implementation (cimi, memory)",
    )
    url: str = Field(
        default="https://localhost:10443/api",
        description="Base URL of the CIMI API",
    )
    auth_token: str = Field(
        default="",
        description="Value sent in the slipstream-authn-info header",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Per-request timeout in seconds",
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per CIMI request on transport errors",
    )
    insecure: bool = Field(
        default=False,
        description="Skip TLS certificate verification (debugging only)",
    )


class ObservabilitySettings(BaseSettings):
    """Logging, tracing and metrics of the monitor itself."""

    model_config = SettingsConfigDict(env_prefix="OTEL_", case_sensitive=False)

    service_name: str = Field(
        default="sla-monitor",
        description="service.name resource attribute of exported spans",
    )
    exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP gRPC collector endpoint; empty disables span export",
    )
    exporter_otlp_insecure: bool = Field(
        default=True,
        description="Use a plaintext gRPC channel to the collector",
    )
    trace_sample_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Fraction of root spans sampled",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json_format: bool = Field(
        default=True,
        description="Render logs as JSON lines instead of console output",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """Root settings object, one per process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment, reported on spans",
    )

    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings loaded on first use and cached for the process lifetime."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them (tests)."""
    global _settings
    _settings = None
