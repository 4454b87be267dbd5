"""
Pytest configuration for the test suite.

This configuration sets up:
- Test discovery paths
- Test markers for categorization
- Shared fixtures: settings, response samples, recording mock transports
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "responses"


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests across the whole pipeline")


# =============================================================================
# Response Samples
# =============================================================================


@pytest.fixture
def load_sample() -> Callable[[str], bytes]:
    """Return a loader for the raw bytes of a response sample."""

    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()

    return _load


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def test_settings():
    """
    Settings with two nodes and test defaults.

    Returns:
        Settings: Configured settings for testing
    """
    from src.core.config import Settings

    return Settings(
        service_name="docsearch-client-test",
        environment="development",
        node_addresses=["http://node-1:9200", "http://node-2:9200"],
        timeout_seconds=5.0,
        default_headers={"X-Client": "tests"},
        log_level="WARNING",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the settings singleton between tests."""
    from src.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Mock Transport
# =============================================================================


class RecordingHandler:
    """
    httpx.MockTransport handler that records requests and replies with a
    canned status and body.
    """

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        raise_exc: Optional[Exception] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.raise_exc = raise_exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_exc is not None:
            raise self.raise_exc
        if isinstance(self.body, (bytes, str)) or self.body is None:
            return httpx.Response(self.status_code, content=self.body or b"")
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())

    @property
    def hosts(self) -> list[str]:
        return [request.url.host for request in self.requests]


@pytest.fixture
def make_handler() -> type[RecordingHandler]:
    """Factory for handlers with a custom reply."""
    return RecordingHandler


@pytest.fixture
def recording_handler() -> RecordingHandler:
    """Handler replying 200 {"acknowledged": true}."""
    return RecordingHandler(body={"acknowledged": True})


@pytest.fixture
def sync_client(test_settings, recording_handler):
    """Blocking client on a mock transport."""
    from src.clients.client import create_sync_client

    client = create_sync_client(
        test_settings, transport=httpx.MockTransport(recording_handler)
    )
    yield client
    client.close()


@pytest.fixture
def async_client(test_settings, recording_handler):
    """Asyncio client on a mock transport."""
    from src.clients.client import create_async_client

    return create_async_client(
        test_settings, transport=httpx.MockTransport(recording_handler)
    )
