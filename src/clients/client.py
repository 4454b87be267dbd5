"""
Document Search Clients

SyncClient and AsyncClient share every operation; they differ only in the
sender they dispatch through. Each operation returns a RequestBuilder that
can be configured before sending.

Usage (blocking):
    with create_sync_client() as client:
        exists = client.index_exists("books").send().exists

Usage (asyncio):
    async with create_async_client() as client:
        task = client.search("books", {"query": {"match_all": {}}}).send()
        response = await task
"""

import asyncio
from typing import Any, Iterable, Optional

import httpx

from src.clients.addresses import NodeAddresses
from src.clients.builder import RequestBuilder
from src.clients.http import create_async_http_client, create_http_client
from src.clients.params import RequestParams
from src.clients.sender import AsyncSender, Sender, SyncSender
from src.core.config import Settings, get_settings
from src.models import endpoints
from src.models.requests import WireRequest
from src.models.responses import (
    BulkErrorsResponse,
    BulkResponse,
    CommandResponse,
    DeleteResponse,
    GetResponse,
    IndexResponse,
    IndicesExistsResponse,
    PingResponse,
    SearchResponse,
    SqlResponse,
    UpdateResponse,
)
from src.observability.logging import configure_logging


class Client:
    """
    Operations shared by both execution modes.

    Args:
        sender: Transport the requests are dispatched through.
        addresses: Node pool, visited round robin.
        defaults: Client-wide headers and query parameters.
    """

    def __init__(
        self,
        sender: Sender,
        addresses: NodeAddresses,
        defaults: Optional[RequestParams] = None,
    ) -> None:
        self._sender = sender
        self._addresses = addresses
        self._defaults = defaults or RequestParams()

    @property
    def sender(self) -> Sender:
        return self._sender

    @property
    def addresses(self) -> NodeAddresses:
        return self._addresses

    @property
    def defaults(self) -> RequestParams:
        return self._defaults

    # =========================================================================
    # Raw Requests
    # =========================================================================

    def request(self, request: WireRequest) -> RequestBuilder[Any]:
        """
        Builder for an arbitrary request.

        ``send`` yields a ResponseEnvelope; parse it later with
        ``envelope.into_response(SomeResponse)``.
        """
        return RequestBuilder(self, request)

    # =========================================================================
    # Cluster and Index Operations
    # =========================================================================

    def ping(self) -> RequestBuilder[PingResponse]:
        return RequestBuilder(self, endpoints.ping(), PingResponse)

    def index_exists(self, index: str) -> RequestBuilder[IndicesExistsResponse]:
        return RequestBuilder(self, endpoints.indices_exists(index), IndicesExistsResponse)

    def index_create(self, index: str, body: Any = None) -> RequestBuilder[CommandResponse]:
        return RequestBuilder(self, endpoints.indices_create(index, body), CommandResponse)

    def index_delete(self, index: str) -> RequestBuilder[CommandResponse]:
        return RequestBuilder(self, endpoints.indices_delete(index), CommandResponse)

    # =========================================================================
    # Document Operations
    # =========================================================================

    def document_index(
        self, index: str, document: Any, id: Optional[str] = None
    ) -> RequestBuilder[IndexResponse]:
        return RequestBuilder(
            self, endpoints.document_index(index, document, id), IndexResponse
        )

    def document_get(
        self, index: str, id: str, document_type: Optional[type] = None
    ) -> RequestBuilder[GetResponse]:
        """
        Fetch a document by id.

        A missing document is a successful response with ``found=False``;
        a missing index raises IndexNotFoundError.
        """
        response_type = GetResponse[document_type] if document_type else GetResponse
        return RequestBuilder(self, endpoints.document_get(index, id), response_type)

    def document_update(self, index: str, id: str, body: Any) -> RequestBuilder[UpdateResponse]:
        return RequestBuilder(
            self, endpoints.document_update(index, id, body), UpdateResponse
        )

    def document_delete(self, index: str, id: str) -> RequestBuilder[DeleteResponse]:
        return RequestBuilder(self, endpoints.document_delete(index, id), DeleteResponse)

    # =========================================================================
    # Search and Bulk
    # =========================================================================

    def search(
        self,
        index: Optional[str] = None,
        query: Any = None,
        document_type: Optional[type] = None,
    ) -> RequestBuilder[SearchResponse]:
        response_type = SearchResponse[document_type] if document_type else SearchResponse
        return RequestBuilder(self, endpoints.search(index, query), response_type)

    def bulk(
        self,
        actions: Iterable[dict[str, Any]],
        index: Optional[str] = None,
        errors_only: bool = False,
    ) -> RequestBuilder[BulkResponse]:
        """
        Submit several operations in one request.

        With ``errors_only`` the response is a BulkErrorsResponse holding only
        the failed items.
        """
        response_type = BulkErrorsResponse if errors_only else BulkResponse
        return RequestBuilder(self, endpoints.bulk(actions, index), response_type)

    def sql(self, query: str, fetch_size: Optional[int] = None) -> RequestBuilder[SqlResponse]:
        return RequestBuilder(self, endpoints.sql(query, fetch_size), SqlResponse)


class SyncClient(Client):
    """Client whose ``send`` blocks until the outcome is available."""

    def __init__(
        self,
        sender: SyncSender,
        addresses: NodeAddresses,
        defaults: Optional[RequestParams] = None,
    ) -> None:
        super().__init__(sender, addresses, defaults)
        self._sync_sender = sender

    def close(self) -> None:
        self._sync_sender.close()

    def __enter__(self) -> "SyncClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class AsyncClient(Client):
    """Client whose ``send`` returns an asyncio.Task."""

    def __init__(
        self,
        sender: AsyncSender,
        addresses: NodeAddresses,
        defaults: Optional[RequestParams] = None,
    ) -> None:
        super().__init__(sender, addresses, defaults)
        self._async_sender = sender

    async def aclose(self) -> None:
        await self._async_sender.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()


# =============================================================================
# Factories
# =============================================================================


def _defaults_from(settings: Settings) -> RequestParams:
    return RequestParams(
        headers=dict(settings.default_headers),
        url_params=dict(settings.default_url_params),
    )


def _configure_logging(settings: Settings, force: bool) -> None:
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        environment=settings.environment,
        force=force,
    )


def create_sync_client(
    settings: Optional[Settings] = None,
    node_addresses: Optional[Iterable[str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
    reconfigure_logging: bool = False,
) -> SyncClient:
    """
    Create a blocking client from settings.

    Logging is configured once per process: the first client's log
    settings stay in effect unless ``reconfigure_logging`` is set.

    Args:
        settings: Client settings (default: get_settings())
        node_addresses: Overrides ``settings.node_addresses``
        transport: Replacement httpx transport (e.g. httpx.MockTransport)
        reconfigure_logging: Apply this client's log settings even if
            logging was already configured

    Returns:
        SyncClient: Configured client
    """
    settings = settings or get_settings()
    _configure_logging(settings, reconfigure_logging)

    http_client = create_http_client(
        timeout_seconds=settings.timeout_seconds,
        max_connections=settings.max_connections,
        max_keepalive=settings.max_keepalive,
        user_agent=settings.user_agent,
        transport=transport,
    )
    addresses = NodeAddresses(
        node_addresses if node_addresses is not None else settings.node_addresses
    )
    return SyncClient(SyncSender(http_client), addresses, _defaults_from(settings))


def create_async_client(
    settings: Optional[Settings] = None,
    node_addresses: Optional[Iterable[str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
    reconfigure_logging: bool = False,
) -> AsyncClient:
    """
    Create an asyncio client from settings.

    Logging is configured as in create_sync_client().

    Args:
        settings: Client settings (default: get_settings())
        node_addresses: Overrides ``settings.node_addresses``
        transport: Replacement httpx transport (e.g. httpx.MockTransport)
        loop: Event loop the request tasks are scheduled on (default: the
            running loop at send time)
        reconfigure_logging: Apply this client's log settings even if
            logging was already configured

    Returns:
        AsyncClient: Configured client
    """
    settings = settings or get_settings()
    _configure_logging(settings, reconfigure_logging)

    http_client = create_async_http_client(
        timeout_seconds=settings.timeout_seconds,
        max_connections=settings.max_connections,
        max_keepalive=settings.max_keepalive,
        user_agent=settings.user_agent,
        transport=transport,
    )
    addresses = NodeAddresses(
        node_addresses if node_addresses is not None else settings.node_addresses
    )
    return AsyncClient(AsyncSender(http_client, loop=loop), addresses, _defaults_from(settings))
