"""
Structured logging for the Turnstile client.

Provides:
- get_logger(): Get a structlog logger bound to a module name
- hash_ip(): Hash client IPs before they reach the logs in production
- setup_logging(): One-shot configuration for host applications

Nothing is configured at import time; a library must not hijack the host's
logging. Events always go through stdlib loggers under "turnstile", which
carry a NullHandler, so the host's levels and handlers decide what is shown.
Applications call setup_logging() early in startup to get structured output.
"""

from __future__ import annotations

import hashlib
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor

from turnstile.config import AppSettings

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "secret",
    "secret_key",
    "token",
    "response",
    "api_key",
    "authorization",
    "idempotency_key",
}

_SENSITIVE_FRAGMENTS = ("secret", "token", "key", "password")
_RESERVED_KEYS = {"level", "event", "timestamp", "logger"}

_is_production = False

logging.getLogger("turnstile").addHandler(logging.NullHandler())


def get_logger(name: str) -> BoundLogger:
    """
    Get a logger that emits through the stdlib logger *name*.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("turnstile_siteverify_ok", hostname="example.com")
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """
    Hash an IP address for privacy in production.

    In production: Returns SHA-256 hash (first 16 chars)
    In development: Returns the original IP for easier debugging
    """
    if ip_address is None:
        return None
    if _is_production and ip_address:
        return hashlib.sha256(ip_address.encode()).hexdigest()[:16]
    return ip_address


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format timestamp to event dict."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact sensitive fields from logs."""
    for key in list(event_dict.keys()):
        if key in _RESERVED_KEYS:
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            fragment in lowered for fragment in _SENSITIVE_FRAGMENTS
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def build_processors(log_format: str) -> list[Processor]:
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        return shared_processors + [structlog.processors.JSONRenderer()]
    return shared_processors + [
        structlog.dev.ConsoleRenderer(colors=True, pad_event=15, sort_keys=False)
    ]


def setup_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Initialize stdlib logging and structlog from *settings*.

    Production: JSON formatting for easy parsing
    Development: Pretty console formatting with colors
    """
    global _is_production

    settings = settings or AppSettings()
    _is_production = settings.is_production
    log_level = settings.logging.log_level
    log_format = settings.logging.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level),
    )

    # httpx/httpcore log every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).info(
        "logging_initialized",
        env=settings.env,
        log_level=log_level,
        log_format=log_format,
    )
