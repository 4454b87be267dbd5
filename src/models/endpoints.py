"""
Endpoint Factories

Each function produces the WireRequest for one remote operation. Path
segments are percent-encoded; commas and wildcards are kept so multi-index
expressions (``logs-*,metrics``) pass through unchanged.
"""

import json
from typing import Any, Iterable, Optional
from urllib.parse import quote

from src.models.requests import NDJSON_CONTENT_TYPE, HttpMethod, WireRequest


def _path(*segments: str) -> str:
    return "/" + "/".join(quote(str(segment), safe=",*") for segment in segments)


def ping() -> WireRequest:
    """Cluster name and version of the node."""
    return WireRequest(method=HttpMethod.GET, path="/")


def indices_exists(index: str) -> WireRequest:
    return WireRequest(method=HttpMethod.HEAD, path=_path(index))


def indices_create(index: str, body: Any = None) -> WireRequest:
    """Create an index, optionally with settings and mappings."""
    return WireRequest.with_json(HttpMethod.PUT, _path(index), body)


def indices_delete(index: str) -> WireRequest:
    return WireRequest(method=HttpMethod.DELETE, path=_path(index))


def document_index(index: str, document: Any, id: Optional[str] = None) -> WireRequest:
    """
    Index a document.

    Without an ``id`` the document is POSTed and the service assigns one.
    """
    if id is None:
        return WireRequest.with_json(HttpMethod.POST, _path(index, "_doc"), document)
    return WireRequest.with_json(HttpMethod.PUT, _path(index, "_doc", id), document)


def document_get(index: str, id: str) -> WireRequest:
    return WireRequest(method=HttpMethod.GET, path=_path(index, "_doc", id))


def document_update(index: str, id: str, body: Any) -> WireRequest:
    """
    Partially update a document.

    ``body`` is the update request, e.g. ``{"doc": {...}}`` or a script.
    """
    return WireRequest.with_json(HttpMethod.POST, _path(index, "_update", id), body)


def document_delete(index: str, id: str) -> WireRequest:
    return WireRequest(method=HttpMethod.DELETE, path=_path(index, "_doc", id))


def search(index: Optional[str] = None, query: Any = None) -> WireRequest:
    """
    Search one or more indices, or all indices when ``index`` is None.

    ``query`` is the full search body (``{"query": {...}, "size": 10}``).
    """
    path = _path(index, "_search") if index else "/_search"
    return WireRequest.with_json(HttpMethod.POST, path, query)


def bulk(actions: Iterable[dict[str, Any]], index: Optional[str] = None) -> WireRequest:
    """
    Submit several operations in one request.

    ``actions`` alternates action metadata and sources as the bulk API
    expects, e.g. ``[{"index": {"_id": "1"}}, {"title": "a"}]``. The body
    is newline-delimited JSON terminated by a newline.
    """
    lines = [json.dumps(action) for action in actions]
    body = ("\n".join(lines) + "\n").encode("utf-8")
    path = _path(index, "_bulk") if index else "/_bulk"
    return WireRequest(
        method=HttpMethod.POST,
        path=path,
        body=body,
        content_type=NDJSON_CONTENT_TYPE,
    )


def sql(query: str, fetch_size: Optional[int] = None) -> WireRequest:
    """Run an SQL query; rows come back in pages of ``fetch_size``."""
    body: dict[str, Any] = {"query": query}
    if fetch_size is not None:
        body["fetch_size"] = fetch_size
    return WireRequest.with_json(HttpMethod.POST, "/_sql", body)
