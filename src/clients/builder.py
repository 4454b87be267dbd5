"""
Request Builder

The facade tying the pipeline together:

    client.request(wire_request)          # configurable builder
        .params_fluent(fn) / .params(p)   # optional configuration
        .send()                           # resolve -> transport -> parse

``send`` resolves parameters exactly once, before the transport is invoked,
then hands the request to the client's sender. For a blocking client it
returns the outcome; for an asyncio client it returns a task.

A builder is single-use. Sending moves the pending request out of the
builder, so a second ``send`` (or any configuration after sending) raises
BuilderConsumedError instead of re-sending.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from src.clients.params import (
    DeferredParams,
    ExplicitParams,
    FluentFn,
    ParamsSource,
    RequestParams,
    resolve_params,
)
from src.clients.sender import SendableRequest
from src.core.exceptions import BuilderConsumedError
from src.models.requests import WireRequest
from src.models.responses import ResponseModel

if TYPE_CHECKING:
    from src.clients.client import Client


T = TypeVar("T", bound=ResponseModel)


@dataclass(frozen=True)
class PendingRequest:
    """Configurable state of a builder that has not been sent."""

    request: WireRequest
    params: ParamsSource


class RequestBuilder(Generic[T]):
    """
    Single-use builder for one call.

    Attributes:
        response_type: Model the response is parsed into, or None to get
            the raw ResponseEnvelope.

    Example:
        >>> response = (
        ...     client.search("books", {"query": {"match_all": {}}})
        ...     .params_fluent(lambda p: p.with_url_param("size", "5"))
        ...     .send()
        ... )
    """

    def __init__(
        self,
        client: "Client",
        request: WireRequest,
        response_type: Optional[type[T]] = None,
    ) -> None:
        self._client = client
        self._pending: Optional[PendingRequest] = PendingRequest(
            request=request, params=DeferredParams()
        )
        self.response_type = response_type

    @property
    def is_sent(self) -> bool:
        return self._pending is None

    def _configurable(self) -> PendingRequest:
        if self._pending is None:
            raise BuilderConsumedError()
        return self._pending

    def params(self, params: RequestParams) -> "RequestBuilder[T]":
        """
        Use an explicit parameter set for this call.

        The node pool is not consulted; ``params`` must carry a base_url and
        is layered over the client's default headers and query parameters.
        """
        pending = self._configurable()
        self._pending = replace(pending, params=ExplicitParams(params))
        return self

    def params_fluent(self, fn: FluentFn) -> "RequestBuilder[T]":
        """
        Adjust the parameters of this call.

        Without an explicit override, ``fn`` runs at send time on the
        defaults combined with the next node address. With an override it is
        applied to the override immediately.
        """
        pending = self._configurable()
        source = pending.params
        if isinstance(source, ExplicitParams):
            updated: ParamsSource = ExplicitParams(fn(source.params))
        else:
            updated = source.then(fn)
        self._pending = replace(pending, params=updated)
        return self

    def send(self) -> Any:
        """
        Resolve parameters, dispatch, and parse.

        Returns:
            Blocking client: the parsed response (or ResponseEnvelope for a
            raw request). Asyncio client: an asyncio.Task resolving to it.

        Raises:
            BuilderConsumedError: The builder was already sent.
            ConfigurationError: Parameters could not be resolved.
            TransportError, ApiError, ParseFailure: Raised directly by the
                blocking client, or by awaiting the task.
        """
        pending = self._configurable()
        self._pending = None

        resolved = resolve_params(
            pending.params, self._client.addresses, self._client.defaults
        )
        sendable = SendableRequest(request=pending.request, params=resolved)
        return self._client.sender.send(sendable, self.response_type)
