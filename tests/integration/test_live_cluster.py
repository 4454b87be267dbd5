"""
Integration tests against a live cluster node.

Exercises the full pipeline (endpoint -> resolver -> transport -> classifier)
with the real service's responses.
"""

import pytest


class TestIndexLifecycle:
    @pytest.mark.integration
    def test_create_exists_delete(self, live_client, index_name) -> None:
        assert live_client.index_exists(index_name).send().exists is False

        assert live_client.index_create(index_name).send().acknowledged is True
        assert live_client.index_exists(index_name).send().exists is True

        assert live_client.index_delete(index_name).send().acknowledged is True
        assert live_client.index_exists(index_name).send().exists is False

    @pytest.mark.integration
    def test_create_twice_raises(self, live_client, index_name) -> None:
        from src.core.exceptions import IndexAlreadyExistsError

        live_client.index_create(index_name).send()

        with pytest.raises(IndexAlreadyExistsError) as exc_info:
            live_client.index_create(index_name).send()
        assert exc_info.value.index == index_name

    @pytest.mark.integration
    def test_delete_missing_index_raises(self, live_client, index_name) -> None:
        from src.core.exceptions import IndexNotFoundError

        with pytest.raises(IndexNotFoundError):
            live_client.index_delete(index_name).send()


class TestDocuments:
    @pytest.mark.integration
    def test_index_get_search(self, live_client, index_name) -> None:
        (
            live_client.document_index(index_name, {"title": "Carrot cultivation"}, id="1")
            .params_fluent(lambda p: p.with_url_param("refresh", "true"))
            .send()
        )

        got = live_client.document_get(index_name, "1").send()
        assert got.found is True
        assert got.document["title"] == "Carrot cultivation"

        results = live_client.search(index_name, {"query": {"match": {"title": "carrot"}}}).send()
        assert results.total == 1

    @pytest.mark.integration
    def test_get_missing_document(self, live_client, index_name) -> None:
        live_client.index_create(index_name).send()

        assert live_client.document_get(index_name, "missing").send().found is False


class TestAsyncClient:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_ping(self, live_async_client) -> None:
        response = await live_async_client.ping().send()

        assert response.cluster_name
