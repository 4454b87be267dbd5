"""
Structured Logging Module

This module provides structured JSON logging with request ID support.

Every call through the request pipeline runs inside a request_id_context,
so the events of one call (request_sent, response_received, transport_failed)
can be correlated even when many calls interleave on one event loop.

Pattern: Structured logging for observability
Pattern: Singleton configuration (configure once, force=True in tests)
"""

import contextvars
import logging
import sys
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, Optional, TextIO

import structlog
from structlog.types import EventDict, Processor


_configured: bool = False

_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


# =============================================================================
# Request ID Context
# =============================================================================


def new_request_id() -> str:
    """Generate a short unique request identifier."""
    return uuid.uuid4().hex[:16]


def get_request_id() -> Optional[str]:
    """
    Get the request ID of the current context.

    Returns:
        Request ID if set, None otherwise
    """
    return _request_id_var.get()


@contextmanager
def request_id_context(request_id: Optional[str] = None) -> Generator[str, None, None]:
    """
    Context manager binding a request ID for the enclosed block.

    asyncio tasks copy the current context when created, so a task started
    inside this block keeps the ID after the block exits.

    Args:
        request_id: Identifier to bind (a new one is generated if omitted)

    Yields:
        The bound request ID

    Example:
        >>> with request_id_context() as request_id:
        ...     logger.debug("request_sent", url=url)
    """
    token = _request_id_var.set(request_id or new_request_id())
    try:
        yield _request_id_var.get()
    finally:
        _request_id_var.reset(token)


# =============================================================================
# Custom Processors
# =============================================================================


def add_request_id(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the request ID to the log event if one is bound."""
    request_id = get_request_id()
    if request_id is not None:
        event_dict["request_id"] = request_id
    return event_dict


def add_timestamp(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO 8601 UTC timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_level(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename log_level to level for cleaner output."""
    if "log_level" in event_dict:
        event_dict["level"] = event_dict.pop("log_level")
    return event_dict


def add_service_info(service_name: Optional[str], environment: Optional[str]) -> Processor:
    """Build a processor stamping every event with the service and environment."""

    def _add(logger: logging.Logger, _method_name: str, event_dict: EventDict) -> EventDict:
        if service_name is not None:
            event_dict.setdefault("service", service_name)
        if environment is not None:
            event_dict.setdefault("environment", environment)
        return event_dict

    return _add


# =============================================================================
# Singleton Configuration
# =============================================================================


def configure_logging(
    level: str = "WARNING",
    stream: Optional[TextIO] = None,
    force: bool = False,
    service_name: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """
    Configure structlog for the client.

    Configuration is process-wide: subsequent calls are no-ops unless
    force=True, so the first caller's level and stream stay in effect.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (default: sys.stderr)
        force: Replace an existing configuration
        service_name: Added to every event as ``service``
        environment: Added to every event as ``environment``
    """
    global _configured

    if _configured and not force:
        return

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_request_id,
        add_service_info(service_name, environment),
        rename_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )

    _configured = True


def reset_logging() -> None:
    """
    Reset logging configuration state.

    WARNING: This should only be used in tests.
    """
    global _configured
    _configured = False
    structlog.reset_defaults()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger bound to ``name``.

    The logger is a lazy proxy: it picks up the configuration in effect when
    an event is emitted, so module-level loggers follow a later
    configure_logging() call.

    Args:
        name: Logger name (typically module name)

    Returns:
        structlog logger proxy

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("request_sent", method="GET", url=url)
    """
    return structlog.get_logger(logger_name=name)


def _level_to_int(level: str) -> int:
    """Convert level string to logging int."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level.upper(), logging.WARNING)
