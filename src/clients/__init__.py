"""
Clients Package

Request pipeline for the document-search service: node rotation,
parameter resolution, blocking and asyncio senders, request builders and
the client facades.
"""

from src.clients.addresses import NodeAddresses
from src.clients.builder import RequestBuilder
from src.clients.client import (
    AsyncClient,
    Client,
    SyncClient,
    create_async_client,
    create_sync_client,
)
from src.clients.http import (
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE,
    DEFAULT_TIMEOUT_SECONDS,
    create_async_http_client,
    create_http_client,
)
from src.clients.params import (
    DeferredParams,
    ExplicitParams,
    RequestParams,
    ResolvedParams,
    resolve_params,
)
from src.clients.sender import (
    AsyncSender,
    ResponseEnvelope,
    SendableRequest,
    Sender,
    SyncSender,
)

__all__ = [
    # Addresses
    "NodeAddresses",
    # Parameters
    "RequestParams",
    "ResolvedParams",
    "ExplicitParams",
    "DeferredParams",
    "resolve_params",
    # Transport
    "create_http_client",
    "create_async_http_client",
    "DEFAULT_MAX_CONNECTIONS",
    "DEFAULT_MAX_KEEPALIVE",
    "DEFAULT_TIMEOUT_SECONDS",
    "Sender",
    "SyncSender",
    "AsyncSender",
    "SendableRequest",
    "ResponseEnvelope",
    # Builders and clients
    "RequestBuilder",
    "Client",
    "SyncClient",
    "AsyncClient",
    "create_sync_client",
    "create_async_client",
]
