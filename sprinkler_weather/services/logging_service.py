"""Structured logging configuration with redaction support."""

import logging
import re
import sys
from typing import Any, Dict

import structlog

SENSITIVE_KEYS = {
    "api_key",
    "appid",
    "authorization",
    "secret",
    "password",
}

# Credentials carried in upstream query strings, e.g. ``?appid=...``
SENSITIVE_QUERY_PATTERN = re.compile(r"(?i)\b(appid|api_key|key)=[^&\s'\"]+")


def _redact_query_values(value: str) -> str:
    """Mask credential query parameters embedded in a string."""
    return SENSITIVE_QUERY_PATTERN.sub(r"\1=REDACTED", value)


def redact_sensitive(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Redact sensitive information from log entries.

    Redacts any field whose name contains one of ``SENSITIVE_KEYS``, and
    masks credential query parameters inside string values (exception
    messages from httpx include the full request URL).
    """
    for key in list(event_dict.keys()):
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            event_dict[key] = "REDACTED"
        elif isinstance(event_dict[key], str):
            event_dict[key] = _redact_query_values(event_dict[key])

    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for JSON output with correlation ID support.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger
