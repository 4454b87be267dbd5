"""
Observability Package

This package provides structured JSON logging with request ID correlation.
"""

from src.observability.logging import (
    configure_logging,
    get_logger,
    get_request_id,
    new_request_id,
    request_id_context,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_request_id",
    "new_request_id",
    "request_id_context",
    "reset_logging",
]
