"""
Custom exceptions for the document-search client.

This module provides the error taxonomy surfaced by the request pipeline.
Every exception inherits from DocSearchClientError and carries an error code
so callers can branch on the cause without string matching.

Taxonomy:
- ConfigurationError: the client cannot resolve request parameters
- TransportError: connection / I-O failure, carries the underlying cause
- ParseFailure: the body matched neither the expected shape nor an error envelope
- ApiError: a structured error reported by the service (closed set of kinds)
- BuilderConsumedError: a request builder was used after it was sent

Pattern: Exceptions as typed outcomes, always chained with 'from e'
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for client exceptions.

    These codes provide a consistent way to identify error types
    across the pipeline and in logging.
    """

    CLIENT_ERROR = "CLIENT_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    PARSE_FAILURE = "PARSE_FAILURE"
    API_ERROR = "API_ERROR"
    BUILDER_CONSUMED = "BUILDER_CONSUMED"


class ApiErrorKind(str, Enum):
    """
    Closed set of error kinds recognised in the service's error envelope.

    Values are the raw ``type`` strings sent by the server.
    """

    INDEX_NOT_FOUND = "index_not_found_exception"
    INDEX_ALREADY_EXISTS = "index_already_exists_exception"
    RESOURCE_ALREADY_EXISTS = "resource_already_exists_exception"
    VERSION_CONFLICT = "version_conflict_engine_exception"
    DOCUMENT_MISSING = "document_missing_exception"
    MAPPER_PARSING = "mapper_parsing_exception"
    ACTION_REQUEST_VALIDATION = "action_request_validation_exception"
    QUERY_PARSING = "parsing_exception"
    UNKNOWN = "unknown"


# =============================================================================
# Base Exception
# =============================================================================


class DocSearchClientError(Exception):
    """
    Base exception for all document-search client errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.CLIENT_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


class ConfigurationError(DocSearchClientError):
    """
    Raised when request parameters cannot be resolved.

    Fatal to the call and never retried: an empty address pool, or an
    explicit parameter override without a base URL.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.CONFIGURATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


class TransportError(DocSearchClientError):
    """
    Exception for connection and I/O failures.

    Both the blocking and the scheduled-task senders raise this same shape,
    so calling code is execution-mode agnostic.

    Attributes:
        cause: The underlying transport exception.
        url: The URL the request was sent to (if known).
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        url: Optional[str] = None,
        error_code: str = ErrorCode.TRANSPORT_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.cause = cause
        self.url = url


class ParseFailure(DocSearchClientError):
    """
    Exception for response bodies that could not be classified.

    The raw body is never dropped silently: a bounded excerpt of it is kept
    alongside the status code for diagnostics.

    Attributes:
        status_code: HTTP status code of the response.
        excerpt: Bounded excerpt of the raw response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        excerpt: str = "",
        error_code: str = ErrorCode.PARSE_FAILURE,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.status_code = status_code
        self.excerpt = excerpt


class UnexpectedStatusError(ParseFailure):
    """Raised by status-only parsing for a status other than 200 or 404."""

    def __init__(self, status_code: int, **kwargs: Any) -> None:
        super().__init__(
            f"Unexpected status code {status_code}",
            status_code=status_code,
            **kwargs,
        )


class BuilderConsumedError(DocSearchClientError):
    """Raised when a request builder is configured or sent after sending."""

    def __init__(
        self,
        message: str = "Request builder has already been sent",
        error_code: str = ErrorCode.BUILDER_CONSUMED,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


# =============================================================================
# API Errors
# =============================================================================


class ApiError(DocSearchClientError):
    """
    Structured error reported by the service.

    Only constructed by the classifier from a recognised error envelope.
    Subclasses narrow the kind and expose the fields the server supplied.

    Attributes:
        kind: The recognised error kind.
        reason: The server's reason string (if any).
        status_code: HTTP status of the response carrying the error.
        body: The raw ``error`` value as decoded from JSON.
    """

    kind: ApiErrorKind = ApiErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Any = None,
        error_code: str = ErrorCode.API_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.reason = reason
        self.status_code = status_code
        self.body = body


class IndexNotFoundError(ApiError):
    """The target index does not exist."""

    kind = ApiErrorKind.INDEX_NOT_FOUND

    def __init__(self, index: Optional[str], **kwargs: Any) -> None:
        super().__init__(f"Index not found: {index}", **kwargs)
        self.index = index


class IndexAlreadyExistsError(ApiError):
    """An index with the requested name already exists."""

    kind = ApiErrorKind.INDEX_ALREADY_EXISTS

    def __init__(self, index: Optional[str], **kwargs: Any) -> None:
        super().__init__(f"Index already exists: {index}", **kwargs)
        self.index = index


class VersionConflictError(ApiError):
    """The document version did not match the expected version."""

    kind = ApiErrorKind.VERSION_CONFLICT

    def __init__(self, index: Optional[str], **kwargs: Any) -> None:
        super().__init__(f"Version conflict in index {index}", **kwargs)
        self.index = index


class DocumentMissingError(ApiError):
    """The document targeted by an update does not exist."""

    kind = ApiErrorKind.DOCUMENT_MISSING

    def __init__(self, index: Optional[str], **kwargs: Any) -> None:
        super().__init__(f"Document missing in index {index}", **kwargs)
        self.index = index


class MapperParsingError(ApiError):
    """A document could not be mapped onto the index schema."""

    kind = ApiErrorKind.MAPPER_PARSING

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(f"Mapper parsing failed: {kwargs.get('reason')}", **kwargs)


class ActionRequestValidationError(ApiError):
    """The request failed server-side validation."""

    kind = ApiErrorKind.ACTION_REQUEST_VALIDATION

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(f"Request validation failed: {kwargs.get('reason')}", **kwargs)


class QueryParsingError(ApiError):
    """
    The request body could not be parsed by the service.

    Attributes:
        line: Line of the offending token (if reported).
        col: Column of the offending token (if reported).
    """

    kind = ApiErrorKind.QUERY_PARSING

    def __init__(
        self,
        line: Optional[int] = None,
        col: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Query parsing failed at {line}:{col}: {kwargs.get('reason')}", **kwargs
        )
        self.line = line
        self.col = col


class UnknownApiError(ApiError):
    """
    Fallback for error envelopes whose type is not recognised.

    Preserves the server's raw ``type`` and ``reason`` strings verbatim.
    ``raw_kind`` is None when the envelope was a plain string.
    """

    def __init__(self, raw_kind: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(
            f"Service error ({raw_kind or 'unknown'}): {kwargs.get('reason')}",
            **kwargs,
        )
        self.raw_kind = raw_kind
