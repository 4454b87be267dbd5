"""
Response Parser / Classifier

Turns a status code and a complete body into either a typed response or a
classified failure.

Structured mode:
    1. invalid JSON                         -> ParseFailure
    2. top-level ``error`` entry            -> ApiError (checked before the
       success shape, the service may report failures with status 200)
    3. status not accepted by the type      -> ParseFailure
    4. body does not match the type         -> ParseFailure
    5. otherwise                            -> the decoded response

Status-only mode:
    200 -> found, 404 -> not found, anything else -> UnexpectedStatusError

Bodies may be bytes, str, a readable object or an iterable of byte chunks;
they are always drained completely before decoding.
"""

import json
import logging
from typing import Any, Iterable, Optional, TypeVar, Union

from pydantic import ValidationError

from src.core.exceptions import ApiError, ParseFailure, UnexpectedStatusError
from src.models.responses import ParseMode, ResponseModel
from src.parsing.api_errors import parse_api_error


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ResponseModel)

Body = Union[bytes, bytearray, memoryview, str, Iterable[bytes], Any]

MAX_EXCERPT_CHARS: int = 512
"""Upper bound on the body excerpt attached to a ParseFailure."""


def read_body(body: Body) -> bytes:
    """
    Drain ``body`` into bytes.

    Accepts bytes-like values, text, objects with a ``read()`` method and
    iterables of byte chunks.
    """
    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if hasattr(body, "read"):
        data = body.read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    return b"".join(bytes(chunk) for chunk in body)


def excerpt(raw: bytes, limit: int = MAX_EXCERPT_CHARS) -> str:
    """Bounded, printable excerpt of a raw body. Never empty."""
    if not raw:
        return "<empty body>"
    text = raw.decode("utf-8", errors="replace")
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def parse(response_type: type[T], status_code: int, body: Body) -> T:
    """
    Parse a response into ``response_type``.

    Args:
        response_type: The expected response model. Its ``parse_mode``
            selects structured or status-only parsing.
        status_code: HTTP status of the response.
        body: The complete response body.

    Returns:
        The decoded response.

    Raises:
        ApiError: The body carried a recognised error envelope.
        ParseFailure: The body matched neither the response type nor an
            error envelope, or the status is not valid for the type.

    Example:
        >>> parse(CommandResponse, 200, b'{"acknowledged": true}').acknowledged
        True
    """
    if response_type.parse_mode is ParseMode.STATUS_ONLY:
        return parse_status(response_type, status_code)

    raw = read_body(body)
    return _parse_structured(response_type, status_code, raw)


def parse_status(response_type: type[T], status_code: int) -> T:
    """
    Status-only parsing: the body is not inspected.

    Raises:
        TypeError: ``response_type`` is not a STATUS_ONLY type.
        UnexpectedStatusError: The status is neither 200 nor 404.
    """
    if response_type.parse_mode is not ParseMode.STATUS_ONLY:
        raise TypeError(f"{response_type.__name__} is not a status-only response")

    if status_code == 200:
        return response_type.from_status(True)
    if status_code == 404:
        return response_type.from_status(False)

    logger.debug("Unexpected status %s for %s", status_code, response_type.__name__)
    raise UnexpectedStatusError(status_code)


def _parse_structured(response_type: type[T], status_code: int, raw: bytes) -> T:
    type_name = response_type.__name__

    if not raw:
        raise ParseFailure(
            f"Empty response body for {type_name}",
            status_code=status_code,
            excerpt=excerpt(raw),
        )

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ParseFailure(
            f"Response body is not valid JSON: {e}",
            status_code=status_code,
            excerpt=excerpt(raw),
        ) from e

    api_error = _embedded_error(data, status_code)
    if api_error is not None:
        logger.debug(
            "Classified %s error for %s (status %s)",
            api_error.kind.value,
            type_name,
            status_code,
        )
        raise api_error

    if not response_type.accepts_status(status_code):
        raise ParseFailure(
            f"Unexpected status {status_code} for {type_name}",
            status_code=status_code,
            excerpt=excerpt(raw),
        )

    try:
        return response_type.model_validate(data)
    except ValidationError as e:
        raise ParseFailure(
            f"Response body does not match {type_name}: {e.error_count()} error(s)",
            status_code=status_code,
            excerpt=excerpt(raw),
        ) from e


def _embedded_error(data: Any, status_code: int) -> Optional[ApiError]:
    if isinstance(data, dict) and "error" in data:
        return parse_api_error(data["error"], status_code)
    return None
