"""
Tests for the single-use request builder.
"""

from unittest.mock import MagicMock

import httpx
import pytest


@pytest.fixture
def counted_client(test_settings, recording_handler):
    """Blocking client whose node pool counts calls to next()."""
    from src.clients.client import create_sync_client

    client = create_sync_client(
        test_settings, transport=httpx.MockTransport(recording_handler)
    )
    client._addresses = MagicMock(wraps=client.addresses)
    yield client
    client.close()


class TestSingleUse:
    """A builder sends at most once."""

    def test_second_send_raises(self, sync_client, recording_handler) -> None:
        from src.core.exceptions import BuilderConsumedError

        builder = sync_client.index_create("carrots")
        builder.send()

        with pytest.raises(BuilderConsumedError):
            builder.send()
        assert len(recording_handler.requests) == 1

    def test_configuration_after_send_raises(self, sync_client) -> None:
        from src.clients.params import RequestParams
        from src.core.exceptions import BuilderConsumedError

        builder = sync_client.index_create("carrots")
        builder.send()

        assert builder.is_sent
        with pytest.raises(BuilderConsumedError):
            builder.params(RequestParams(base_url="http://explicit:9200"))
        with pytest.raises(BuilderConsumedError):
            builder.params_fluent(lambda p: p)

    def test_failed_send_still_consumes(self, test_settings, make_handler) -> None:
        from src.clients.client import create_sync_client
        from src.core.exceptions import BuilderConsumedError, TransportError

        handler = make_handler(raise_exc=httpx.ConnectError("refused"))
        with create_sync_client(
            test_settings, transport=httpx.MockTransport(handler)
        ) as client:
            builder = client.ping()
            with pytest.raises(TransportError):
                builder.send()
            with pytest.raises(BuilderConsumedError):
                builder.send()


class TestParameterResolution:
    """Tests for how the builder picks parameters."""

    def test_default_send_uses_pool_once(self, counted_client, recording_handler) -> None:
        counted_client.index_create("carrots").send()

        assert counted_client.addresses.next.call_count == 1
        assert recording_handler.hosts == ["node-1"]

    def test_explicit_params_bypass_pool(self, counted_client, recording_handler) -> None:
        from src.clients.params import RequestParams

        (
            counted_client.index_create("carrots")
            .params(RequestParams(base_url="http://explicit:9200"))
            .send()
        )

        assert counted_client.addresses.next.call_count == 0
        assert recording_handler.hosts == ["explicit"]

    def test_explicit_params_keep_client_defaults(
        self, counted_client, recording_handler
    ) -> None:
        from src.clients.params import RequestParams

        (
            counted_client.index_create("carrots")
            .params(RequestParams(base_url="http://explicit:9200"))
            .send()
        )

        assert recording_handler.requests[0].headers["X-Client"] == "tests"

    def test_fluent_on_explicit_applies_immediately(
        self, counted_client, recording_handler
    ) -> None:
        from src.clients.params import RequestParams

        (
            counted_client.index_create("carrots")
            .params(RequestParams(base_url="http://explicit:9200"))
            .params_fluent(lambda p: p.with_url_param("wait_for_active_shards", "1"))
            .send()
        )

        request = recording_handler.requests[0]
        assert request.url.params["wait_for_active_shards"] == "1"
        assert counted_client.addresses.next.call_count == 0

    def test_fluent_sees_pool_address(self, counted_client, recording_handler) -> None:
        seen = []

        def capture(params):
            seen.append(params.base_url)
            return params.with_header("X-Opaque-Id", "books-reindex")

        counted_client.index_create("carrots").params_fluent(capture).send()

        assert seen == ["http://node-1:9200"]
        assert recording_handler.requests[0].headers["X-Opaque-Id"] == "books-reindex"

    def test_later_params_replace_fluent(self, counted_client, recording_handler) -> None:
        from src.clients.params import RequestParams

        (
            counted_client.index_create("carrots")
            .params_fluent(lambda p: p.with_header("X-Dropped", "1"))
            .params(RequestParams(base_url="http://explicit:9200"))
            .send()
        )

        assert "X-Dropped" not in recording_handler.requests[0].headers
        assert counted_client.addresses.next.call_count == 0


class TestAsyncBuilder:
    @pytest.mark.asyncio
    async def test_pool_consulted_before_task_runs(
        self, test_settings, recording_handler
    ) -> None:
        """Parameters are resolved synchronously by send()."""
        import asyncio

        from src.clients.client import create_async_client

        client = create_async_client(
            test_settings, transport=httpx.MockTransport(recording_handler)
        )
        client._addresses = MagicMock(wraps=client.addresses)

        task = client.index_create("carrots").send()

        assert isinstance(task, asyncio.Task)
        assert client.addresses.next.call_count == 1
        assert recording_handler.requests == []

        response = await task
        assert response.acknowledged is True
        assert len(recording_handler.requests) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_second_send_raises(self, async_client) -> None:
        from src.core.exceptions import BuilderConsumedError

        builder = async_client.index_create("carrots")
        await builder.send()

        with pytest.raises(BuilderConsumedError):
            builder.send()
