"""
Request Models - Wire Request Descriptor

This module contains the immutable description of one outbound call:
method, path, optional body and content type. It is independent of the
transport and of the node the call is eventually sent to.

Pattern: Value object (frozen Pydantic model)
"""

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


JSON_CONTENT_TYPE = "application/json"
NDJSON_CONTENT_TYPE = "application/x-ndjson"


class HttpMethod(str, Enum):
    """HTTP methods used by the service API."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class WireRequest(BaseModel):
    """
    Immutable descriptor of one outbound call.

    Produced by the endpoint factories and consumed exactly once by the
    request pipeline.

    Attributes:
        method: HTTP method.
        path: Request path with path parameters already substituted.
        body: Serialized request body (None for bodyless requests).
        content_type: Content type of the body.

    Example:
        >>> req = WireRequest.with_json(HttpMethod.PUT, "/carrots", {"settings": {}})
        >>> req.body
        b'{"settings": {}}'
    """

    method: HttpMethod = Field(..., description="HTTP method")
    path: str = Field(..., description="Substituted request path")
    body: Optional[bytes] = Field(default=None, description="Serialized body")
    content_type: str = Field(default=JSON_CONTENT_TYPE, description="Body content type")

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Paths are absolute."""
        if not v.startswith("/"):
            raise ValueError(f"Request path must start with '/': {v!r}")
        return v

    @classmethod
    def with_json(
        cls,
        method: HttpMethod,
        path: str,
        body: Any = None,
    ) -> "WireRequest":
        """
        Build a request whose body is serialized as JSON.

        ``bytes`` and ``str`` bodies are taken as already serialized.
        """
        return cls(method=method, path=path, body=serialize_body(body))

    @property
    def has_body(self) -> bool:
        """Whether the request carries a body."""
        return self.body is not None


def serialize_body(body: Any) -> Optional[bytes]:
    """Serialize a request body to bytes."""
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body).encode("utf-8")
