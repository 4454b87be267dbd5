"""
API Error Classification

Maps the service's ``error`` entry onto the ApiError hierarchy.

The entry is either a plain string, or an object with at least ``type`` and
``reason`` plus operation-specific fields (``index``, ``line``, ``col``...).
Recognised types map to their dedicated exception; anything else becomes an
UnknownApiError carrying the server's raw type and reason.
"""

from typing import Any, Callable, Optional

from src.core.exceptions import (
    ActionRequestValidationError,
    ApiError,
    ApiErrorKind,
    DocumentMissingError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    MapperParsingError,
    QueryParsingError,
    UnknownApiError,
    VersionConflictError,
)


def _index_of(error: dict[str, Any]) -> Optional[str]:
    return error.get("index") or error.get("resource.id")


_ERROR_FACTORIES: dict[str, Callable[..., ApiError]] = {
    ApiErrorKind.INDEX_NOT_FOUND.value: lambda e, **kw: IndexNotFoundError(
        index=_index_of(e), **kw
    ),
    ApiErrorKind.INDEX_ALREADY_EXISTS.value: lambda e, **kw: IndexAlreadyExistsError(
        index=_index_of(e), **kw
    ),
    ApiErrorKind.RESOURCE_ALREADY_EXISTS.value: lambda e, **kw: IndexAlreadyExistsError(
        index=_index_of(e), **kw
    ),
    ApiErrorKind.VERSION_CONFLICT.value: lambda e, **kw: VersionConflictError(
        index=_index_of(e), **kw
    ),
    ApiErrorKind.DOCUMENT_MISSING.value: lambda e, **kw: DocumentMissingError(
        index=_index_of(e), **kw
    ),
    ApiErrorKind.MAPPER_PARSING.value: lambda e, **kw: MapperParsingError(**kw),
    ApiErrorKind.ACTION_REQUEST_VALIDATION.value: lambda e, **kw: ActionRequestValidationError(
        **kw
    ),
    ApiErrorKind.QUERY_PARSING.value: lambda e, **kw: QueryParsingError(
        line=e.get("line"), col=e.get("col"), **kw
    ),
}


def parse_api_error(error: Any, status_code: Optional[int] = None) -> Optional[ApiError]:
    """
    Classify an ``error`` entry.

    Args:
        error: The decoded value of the ``error`` key.
        status_code: Status of the response (or bulk item) carrying it.

    Returns:
        The classified ApiError, or None when ``error`` is neither a string
        nor an object with a string ``type``.

    Example:
        >>> err = parse_api_error({"type": "index_not_found_exception",
        ...                        "reason": "no such index", "index": "carrots"}, 404)
        >>> err.index
        'carrots'
    """
    if isinstance(error, str):
        return UnknownApiError(reason=error, status_code=status_code, body=error)

    if not isinstance(error, dict) or not isinstance(error.get("type"), str):
        return None

    kind = error["type"]
    common = {"reason": error.get("reason"), "status_code": status_code, "body": error}

    factory = _ERROR_FACTORIES.get(kind)
    if factory is None:
        return UnknownApiError(raw_kind=kind, **common)
    return factory(error, **common)
