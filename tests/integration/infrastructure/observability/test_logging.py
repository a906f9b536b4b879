"""Integration tests for structured logging.

Tests that logs are formatted correctly and credentials are masked.
"""

import logging

from src.infrastructure.config.settings import ObservabilitySettings
from src.infrastructure.observability.logging import (
    _mask_sensitive_data,
    configure_logging,
    get_logger,
)


class TestStructuredLogging:
    """Tests for structured logging configuration."""

    def test_logger_emits_records(self, caplog):
        """Test that the configured logger emits through stdlib logging."""
        configure_logging()
        logger = get_logger(__name__)

        with caplog.at_level(logging.INFO):
            logger.info(
                "Assessment pass started",
                agreement_id="a01",
                guarantee="*",
            )

        assert len(caplog.records) > 0

    def test_console_format(self):
        """Test that console rendering can be selected."""
        configure_logging(ObservabilitySettings(log_json_format=False, log_level="DEBUG"))
        logger = get_logger(__name__)

        logger.debug("Debug message", variable="availability")

    def test_sensitive_data_masking(self):
        """Test that credentials are masked by the processor."""
        event_dict = {
            "event": "CIMI repository configured",
            "url": "https://localhost:10443/api",
            "auth_token": "user/admin group/admin",
            "password": "abc",
        }

        masked = _mask_sensitive_data(None, "info", event_dict)

        assert masked["auth_token"] != "user/admin group/admin"
        assert masked["auth_token"].startswith("user")
        assert masked["password"] == "***REDACTED***"
        assert masked["url"] == "https://localhost:10443/api"
        assert masked["event"] == "CIMI repository configured"

    def test_nested_sensitive_data_masking(self):
        """Test that credentials inside nested dicts are masked."""
        event_dict = {
            "event": "CIMI request",
            "headers": {"slipstream-authn-info": "user/admin group/admin"},
        }

        masked = _mask_sensitive_data(None, "info", event_dict)

        assert masked["headers"]["slipstream-authn-info"].startswith("user")
        assert "admin" not in masked["headers"]["slipstream-authn-info"]

    def test_exception_logging(self):
        """Test exception logging with stack traces."""
        configure_logging()
        logger = get_logger(__name__)

        try:
            raise ValueError("Test exception")
        except ValueError:
            logger.error("Exception occurred", exc_info=True)
