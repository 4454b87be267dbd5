"""
Node Addresses - Round Robin Address Pool

Holds the ordered set of base URLs of a cluster and hands out the next one
on every request that has no explicit parameter override.

The rotation cursor is the only mutable state shared between concurrent
calls. It is an ``itertools.count``: ``next()`` on it is a single C-level
fetch-and-add, atomic under the GIL, so concurrent callers never observe the
same cursor value and no lock is taken.

Pattern: Round robin selection, no health or latency weighting
"""

import itertools
from typing import Iterable, Iterator

from src.core.exceptions import ConfigurationError


def normalise_address(address: str) -> str:
    """Strip whitespace and trailing slashes, require an http(s) scheme."""
    address = address.strip().rstrip("/")
    if not address.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"Node address must start with http:// or https://: {address!r}",
            address=address,
        )
    return address


class NodeAddresses:
    """
    Fixed, ordered pool of node base URLs with round robin rotation.

    An empty pool is allowed at construction; every ``next()`` on it then
    raises ConfigurationError.

    Example:
        >>> pool = NodeAddresses(["http://es-1:9200", "http://es-2:9200"])
        >>> [pool.next() for _ in range(3)]
        ['http://es-1:9200', 'http://es-2:9200', 'http://es-1:9200']
    """

    def __init__(self, addresses: Iterable[str]) -> None:
        self._addresses: tuple[str, ...] = tuple(
            normalise_address(address) for address in addresses
        )
        self._cursor = itertools.count()

    @classmethod
    def single(cls, address: str) -> "NodeAddresses":
        """Pool with one node."""
        return cls([address])

    @property
    def addresses(self) -> tuple[str, ...]:
        return self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[str]:
        return iter(self._addresses)

    def __repr__(self) -> str:
        return f"NodeAddresses({list(self._addresses)!r})"

    def next(self) -> str:
        """
        Return the next address in round robin order.

        Raises:
            ConfigurationError: If the pool is empty.
        """
        if not self._addresses:
            raise ConfigurationError("No node addresses configured")

        index = next(self._cursor) % len(self._addresses)
        return self._addresses[index]
