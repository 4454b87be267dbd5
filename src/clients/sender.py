"""
Senders - Transport Abstraction

Two execution modes behind one interface:

- SyncSender: blocks the calling thread until the response (or a transport
  failure) is available.
- AsyncSender: schedules the call as an asyncio task on the event loop and
  returns the task; awaiting it yields the same outcome. Cancelling the task
  aborts the in-flight request, nothing is parsed from partial bytes.

Request construction, logging, error translation and response parsing live
on the Sender base class, so both modes run the same code paths.

Pattern: Ports and Adapters - Sender is the port, httpx the adapter
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, TypeVar, Union

import httpx

from src.clients.params import ResolvedParams
from src.core.exceptions import TransportError
from src.models.requests import WireRequest
from src.models.responses import ResponseModel
from src.observability.logging import get_logger, request_id_context
from src.parsing.parser import parse


logger = get_logger(__name__)

T = TypeVar("T", bound=ResponseModel)

_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


# =============================================================================
# Request / Response Envelopes
# =============================================================================


@dataclass(frozen=True)
class SendableRequest:
    """A wire request paired with its resolved parameters."""

    request: WireRequest
    params: ResolvedParams

    @property
    def url(self) -> str:
        return self.params.url(self.request.path)


class ResponseEnvelope:
    """
    Status code and complete body of one response.

    Parse it into a typed response with ``into_response``, or take the raw
    bytes with ``into_raw``.
    """

    def __init__(
        self,
        status_code: int,
        body: bytes,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers or {})

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ResponseEnvelope":
        return cls(
            status_code=response.status_code,
            body=response.content,
            headers=response.headers,
        )

    def into_response(self, response_type: type[T]) -> T:
        """
        Parse the body into ``response_type``.

        Raises:
            ApiError: The body carried a recognised error envelope.
            ParseFailure: The body could not be classified.
        """
        return parse(response_type, self.status_code, self.body)

    def into_raw(self) -> bytes:
        return self.body

    def __repr__(self) -> str:
        return f"ResponseEnvelope(status_code={self.status_code}, body={len(self.body)} bytes)"


# =============================================================================
# Sender Interface
# =============================================================================


class Sender(ABC):
    """
    Executes resolved requests over an httpx client.

    ``send`` returns either a ResponseEnvelope, or the parsed response when a
    ``response_type`` is given. SyncSender returns it directly, AsyncSender
    returns an asyncio.Task that resolves to it.
    """

    def __init__(self, http_client: Union[httpx.Client, httpx.AsyncClient]) -> None:
        self._http = http_client

    @property
    def http_client(self) -> Union[httpx.Client, httpx.AsyncClient]:
        return self._http

    @abstractmethod
    def send(
        self,
        sendable: SendableRequest,
        response_type: Optional[type[T]] = None,
    ) -> Any:
        ...

    def _build_request(self, sendable: SendableRequest) -> httpx.Request:
        request = sendable.request
        headers = dict(sendable.params.headers)
        if request.body is not None:
            headers.setdefault("Content-Type", request.content_type)

        return self._http.build_request(
            request.method.value,
            sendable.url,
            params=sendable.params.url_params or None,
            headers=headers,
            content=request.body,
        )

    def _log_sent(self, sendable: SendableRequest) -> None:
        logger.debug(
            "request_sent",
            method=sendable.request.method.value,
            url=sendable.url,
        )

    def _complete(
        self,
        sendable: SendableRequest,
        response: httpx.Response,
        response_type: Optional[type[T]],
    ) -> Any:
        envelope = ResponseEnvelope.from_httpx(response)
        logger.debug(
            "response_received",
            url=sendable.url,
            status_code=envelope.status_code,
            body_bytes=len(envelope.body),
        )
        if response_type is None:
            return envelope
        return envelope.into_response(response_type)

    def _transport_error(self, sendable: SendableRequest, e: Exception) -> TransportError:
        logger.warning(
            "transport_failed",
            url=sendable.url,
            error_type=type(e).__name__,
            error=str(e),
        )
        return TransportError(
            f"Request to {sendable.url} failed: {e}",
            cause=e,
            url=sendable.url,
        )


# =============================================================================
# Blocking Sender
# =============================================================================


class SyncSender(Sender):
    """
    Sender for the blocking client.

    Safe to share between threads: httpx.Client is thread-safe and the
    sender holds no per-call state.
    """

    def __init__(self, http_client: httpx.Client) -> None:
        super().__init__(http_client)

    def send(
        self,
        sendable: SendableRequest,
        response_type: Optional[type[T]] = None,
    ) -> Any:
        """
        Send a request and wait for the response.

        Returns:
            ResponseEnvelope, or the parsed response if ``response_type`` is given.

        Raises:
            TransportError: Connection or I/O failure.
            ApiError: The response carried a recognised error envelope.
            ParseFailure: The response could not be classified.
        """
        with request_id_context():
            self._log_sent(sendable)
            try:
                response = self._http.send(self._build_request(sendable))
            except _TRANSPORT_ERRORS as e:
                raise self._transport_error(sendable, e) from e

            return self._complete(sendable, response, response_type)

    def close(self) -> None:
        self._http.close()


# =============================================================================
# Scheduled-Task Sender
# =============================================================================


class AsyncSender(Sender):
    """
    Sender for the asyncio client.

    Each call becomes one task on the event loop. The loop can be supplied
    explicitly; otherwise the running loop is used, so ``send`` must then be
    called from a coroutine.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        super().__init__(http_client)
        self._loop = loop

    def send(
        self,
        sendable: SendableRequest,
        response_type: Optional[type[T]] = None,
    ) -> "asyncio.Task[Any]":
        """
        Schedule a request.

        Returns:
            A task resolving to a ResponseEnvelope, or to the parsed response
            if ``response_type`` is given. It raises the same exceptions as
            SyncSender.send when awaited.

        Raises:
            RuntimeError: No loop was supplied and none is running.
        """
        loop = self._loop or asyncio.get_running_loop()
        with request_id_context():
            self._log_sent(sendable)
            return loop.create_task(self._dispatch(sendable, response_type))

    async def _dispatch(
        self,
        sendable: SendableRequest,
        response_type: Optional[type[T]],
    ) -> Any:
        try:
            response = await self._http.send(self._build_request(sendable))
        except _TRANSPORT_ERRORS as e:
            raise self._transport_error(sendable, e) from e

        return self._complete(sendable, response, response_type)

    async def aclose(self) -> None:
        await self._http.aclose()
