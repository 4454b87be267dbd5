"""
Request Parameters and Resolution

Request parameters (base URL, headers, query string) come from three places:

- client-wide defaults, fixed when the client is built,
- an explicit per-call override (``ExplicitParams``), or
- the next address of the node pool (``DeferredParams``), plus any fluent
  adjustments registered on the request builder.

The override and the deferred lookup form a tagged union. resolve_params()
consumes it exactly once, synchronously, before the transport is invoked:
with an explicit override the node pool is never consulted.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from pydantic import BaseModel, Field

from src.clients.addresses import NodeAddresses
from src.core.exceptions import ConfigurationError


class RequestParams(BaseModel):
    """
    A set of request parameters.

    Used for the client-wide defaults (usually without ``base_url``) and for
    explicit per-call overrides (which must carry a ``base_url``).

    The model is frozen; the ``with_*`` helpers return updated copies so they
    can be chained inside a fluent function:

        >>> builder.params_fluent(lambda p: p.with_header("X-Opaque-Id", "abc"))
    """

    base_url: Optional[str] = Field(default=None, description="Node base URL")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    url_params: dict[str, str] = Field(
        default_factory=dict, description="Query string parameters"
    )

    model_config = {"frozen": True}

    def with_base_url(self, base_url: str) -> "RequestParams":
        return self.model_copy(update={"base_url": base_url.rstrip("/")})

    def with_header(self, name: str, value: str) -> "RequestParams":
        return self.model_copy(update={"headers": {**self.headers, name: value}})

    def with_url_param(self, name: str, value: str) -> "RequestParams":
        return self.model_copy(update={"url_params": {**self.url_params, name: value}})

    def merged_over(self, defaults: "RequestParams") -> "RequestParams":
        """Layer these parameters over ``defaults``; these win on clashes."""
        return RequestParams(
            base_url=self.base_url or defaults.base_url,
            headers={**defaults.headers, **self.headers},
            url_params={**defaults.url_params, **self.url_params},
        )


class ResolvedParams(BaseModel):
    """Concrete parameters for one call, ready for the transport."""

    base_url: str
    headers: dict[str, str] = Field(default_factory=dict)
    url_params: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def url(self, path: str) -> str:
        """Join the base URL and an absolute request path."""
        return self.base_url + path


FluentFn = Callable[[RequestParams], RequestParams]


@dataclass(frozen=True)
class ExplicitParams:
    """A caller-supplied parameter set; bypasses the node pool."""

    params: RequestParams


@dataclass(frozen=True)
class DeferredParams:
    """Parameters resolved from the node pool when the request is sent."""

    fluent: tuple[FluentFn, ...] = field(default_factory=tuple)

    def then(self, fn: FluentFn) -> "DeferredParams":
        return DeferredParams(fluent=self.fluent + (fn,))


ParamsSource = Union[ExplicitParams, DeferredParams]


def resolve_params(
    source: ParamsSource,
    addresses: NodeAddresses,
    defaults: RequestParams,
) -> ResolvedParams:
    """
    Resolve a parameter source into concrete parameters.

    Args:
        source: The builder's explicit override or deferred lookup.
        addresses: The client's node pool; ``next()`` is called exactly once
            for a deferred source and never for an explicit one.
        defaults: Immutable client-wide defaults.

    Returns:
        ResolvedParams for the transport.

    Raises:
        ConfigurationError: The pool is empty, or the override (after
            merging) has no base URL.
    """
    if isinstance(source, ExplicitParams):
        params = source.params.merged_over(defaults)
    else:
        params = defaults.with_base_url(addresses.next())
        for fn in source.fluent:
            params = fn(params)

    if not params.base_url:
        raise ConfigurationError("Request parameters have no base_url")

    return ResolvedParams(
        base_url=params.base_url.rstrip("/"),
        headers=dict(params.headers),
        url_params=dict(params.url_params),
    )
