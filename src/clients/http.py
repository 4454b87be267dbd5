"""
HTTP Client Module - Transport Factories

This module builds the httpx clients the senders dispatch through, with
connection pooling, timeouts and default headers.

The clients carry no base_url: every request is sent to the absolute URL of
the node chosen by parameter resolution. Transport-level retries are
disabled, the request pipeline never retries.

Pattern: Factory pattern for creating configured HTTP clients
"""

from typing import Optional

import httpx


DEFAULT_TIMEOUT_SECONDS: float = 30.0
"""Default connect/read/write/pool timeout in seconds."""

DEFAULT_MAX_CONNECTIONS: int = 100
"""Maximum number of connections in the pool."""

DEFAULT_MAX_KEEPALIVE: int = 20
"""Maximum number of keepalive connections."""

DEFAULT_USER_AGENT: str = "docsearch-client/1.0"


def _build_config(
    timeout_seconds: Optional[float],
    max_connections: Optional[int],
    max_keepalive: Optional[int],
    user_agent: Optional[str],
    headers: Optional[dict[str, str]],
) -> tuple[httpx.Timeout, httpx.Limits, dict[str, str]]:
    timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
    max_conn = max_connections if max_connections is not None else DEFAULT_MAX_CONNECTIONS
    max_keep = max_keepalive if max_keepalive is not None else DEFAULT_MAX_KEEPALIVE

    limits = httpx.Limits(
        max_connections=max_conn,
        max_keepalive_connections=max_keep,
    )

    timeout_config = httpx.Timeout(
        connect=timeout,
        read=timeout,
        write=timeout,
        pool=timeout,
    )

    default_headers = {
        "User-Agent": user_agent or DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }
    if headers:
        default_headers.update(headers)

    return timeout_config, limits, default_headers


def create_http_client(
    timeout_seconds: Optional[float] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    user_agent: Optional[str] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create a configured blocking HTTP client.

    Args:
        timeout_seconds: Request timeout in seconds (default: 30.0)
        max_connections: Maximum connections in pool (default: 100)
        max_keepalive: Maximum keepalive connections (default: 20)
        user_agent: User-Agent header value
        headers: Additional headers to include in all requests
        transport: Replacement transport (e.g. httpx.MockTransport in tests)

    Returns:
        httpx.Client: Configured HTTP client

    Example:
        >>> client = create_http_client(timeout_seconds=10.0)
        >>> with client:
        ...     response = client.get("http://localhost:9200/")
    """
    timeout, limits, default_headers = _build_config(
        timeout_seconds, max_connections, max_keepalive, user_agent, headers
    )
    return httpx.Client(
        timeout=timeout,
        headers=default_headers,
        transport=transport or httpx.HTTPTransport(retries=0, limits=limits),
    )


def create_async_http_client(
    timeout_seconds: Optional[float] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    user_agent: Optional[str] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a configured async HTTP client.

    Takes the same arguments as create_http_client().

    Returns:
        httpx.AsyncClient: Configured async HTTP client
    """
    timeout, limits, default_headers = _build_config(
        timeout_seconds, max_connections, max_keepalive, user_agent, headers
    )
    return httpx.AsyncClient(
        timeout=timeout,
        headers=default_headers,
        transport=transport or httpx.AsyncHTTPTransport(retries=0, limits=limits),
    )
