"""
Integration Test Infrastructure

Fixtures for tests that run against a live cluster node, e.g.

    docker run -p 9200:9200 -e discovery.type=single-node elasticsearch:<version>

Set INTEGRATION_NODE_URL to point elsewhere. Tests are skipped when the node
is not reachable.
"""

import os
import uuid
from typing import AsyncIterator, Iterator

import httpx
import pytest
import pytest_asyncio


@pytest.fixture(scope="session")
def node_url() -> str:
    """Cluster node URL from environment or the local default."""
    return os.getenv("INTEGRATION_NODE_URL", "http://localhost:9200")


@pytest.fixture(scope="session")
def cluster_available(node_url: str) -> bool:
    """
    Check if the cluster node is reachable.

    Returns:
        True if the node answers, False otherwise
    """
    try:
        with httpx.Client(timeout=5.0) as client:
            return client.get(node_url).status_code == 200
    except (httpx.ConnectError, httpx.TimeoutException):
        return False


@pytest.fixture
def skip_if_no_cluster(cluster_available: bool) -> None:
    """Skip the test if the cluster node is not available."""
    if not cluster_available:
        pytest.skip("Cluster node not available - start one or set INTEGRATION_NODE_URL")


@pytest.fixture
def index_name() -> str:
    """Unique index name per test for isolation."""
    return f"it-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def live_settings(node_url: str):
    from src.core.config import Settings

    return Settings(node_addresses=[node_url], timeout_seconds=10.0)


@pytest.fixture
def live_client(skip_if_no_cluster, live_settings, index_name) -> Iterator:
    """Blocking client that deletes the test index afterwards."""
    from src.clients.client import create_sync_client
    from src.core.exceptions import IndexNotFoundError

    client = create_sync_client(live_settings)
    yield client
    try:
        client.index_delete(index_name).send()
    except IndexNotFoundError:
        pass
    client.close()


@pytest_asyncio.fixture
async def live_async_client(skip_if_no_cluster, live_settings) -> AsyncIterator:
    from src.clients.client import create_async_client

    client = create_async_client(live_settings)
    yield client
    await client.aclose()
