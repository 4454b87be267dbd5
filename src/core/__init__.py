"""
Core module for the document-search client.

This module contains configuration and the error taxonomy.
"""

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    ActionRequestValidationError,
    ApiError,
    ApiErrorKind,
    BuilderConsumedError,
    ConfigurationError,
    DocSearchClientError,
    DocumentMissingError,
    ErrorCode,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    MapperParsingError,
    ParseFailure,
    QueryParsingError,
    TransportError,
    UnexpectedStatusError,
    UnknownApiError,
    VersionConflictError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "ApiErrorKind",
    "DocSearchClientError",
    "ConfigurationError",
    "TransportError",
    "ParseFailure",
    "UnexpectedStatusError",
    "BuilderConsumedError",
    "ApiError",
    "IndexNotFoundError",
    "IndexAlreadyExistsError",
    "VersionConflictError",
    "DocumentMissingError",
    "MapperParsingError",
    "ActionRequestValidationError",
    "QueryParsingError",
    "UnknownApiError",
]
