"""structlog setup for the SLA monitor.

Log events carry the trace/span ids of the active span, so a log line can be
matched with the get_values span of the guarantee being evaluated. CIMI
credentials (the slipstream-authn-info header, auth tokens) are masked.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from src.infrastructure.config import get_settings
from src.infrastructure.config.settings import ObservabilitySettings

SENSITIVE_KEYS = frozenset(
    {
        "auth_token",
        "password",
        "secret",
        "token",
        "authorization",
        "slipstream-authn-info",
    }
)

# Chatty per-request loggers of the HTTP stack
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(config: ObservabilitySettings | None = None) -> None:
    """Route stdlib and structlog logging to stdout.

    Args:
        config: Observability settings; defaults to the global settings
    """
    otel_config = config or get_settings().observability
    level = getattr(logging, otel_config.log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer: list = (
        [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        if otel_config.log_json_format
        else [structlog.dev.ConsoleRenderer()]
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_trace_context,
            _mask_sensitive_data,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            *renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def _mask(value: Any) -> str:
    if isinstance(value, str) and len(value) > 4:
        return value[:4] + "*" * (len(value) - 4)
    return "***REDACTED***"


def _mask_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask credential values, including inside nested dicts such as headers.

    Strings longer than 4 characters keep their first 4 characters.
    """
    masked: dict[str, Any] = {}
    for key, value in event_dict.items():
        if isinstance(key, str) and key.lower() in SENSITIVE_KEYS:
            masked[key] = _mask(value)
        elif isinstance(value, dict):
            masked[key] = _mask_sensitive_data(logger, method_name, value)
        else:
            masked[key] = value
    return masked


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """structlog logger bound to name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Assessment pass started", agreement_id="a01")
    """
    return structlog.get_logger(name)
