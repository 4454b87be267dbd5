"""
Tests for the typed response models, decoded from recorded samples.
"""

import json

from pydantic import BaseModel


class Book(BaseModel):
    title: str
    pages: int


def _decode(load_sample, name: str) -> dict:
    return json.loads(load_sample(name))


class TestCommandResponses:
    def test_ping(self, load_sample) -> None:
        from src.models.responses import PingResponse

        response = PingResponse.model_validate(_decode(load_sample, "ping_success.json"))

        assert response.name == "Scorcher"
        assert response.cluster_name == "elasticsearch"
        assert response.version.lucene_version == "7.2.1"

    def test_indices_exists_from_status(self) -> None:
        from src.models.responses import IndicesExistsResponse, ParseMode

        assert IndicesExistsResponse.parse_mode is ParseMode.STATUS_ONLY
        assert IndicesExistsResponse.from_status(True).exists is True
        assert IndicesExistsResponse.from_status(False).exists is False

    def test_accepts_status(self) -> None:
        from src.models.responses import CommandResponse, DeleteResponse, GetResponse

        assert CommandResponse.accepts_status(201)
        assert not CommandResponse.accepts_status(404)
        assert DeleteResponse.accepts_status(404)
        assert GetResponse.accepts_status(404)


class TestDocumentResponses:
    def test_index_response(self, load_sample) -> None:
        from src.models.responses import IndexResponse

        response = IndexResponse.model_validate(_decode(load_sample, "index_success.json"))

        assert response.index == "testindex"
        assert response.id == "1"
        assert response.created is True
        assert response.shards.successful == 1
        assert response.seq_no == 0

    def test_index_response_legacy_created_flag(self) -> None:
        from src.models.responses import IndexResponse

        response = IndexResponse.model_validate(
            {"_index": "books", "_id": "1", "created": False}
        )

        assert response.created is False

    def test_update_response(self, load_sample) -> None:
        from src.models.responses import UpdateResponse

        response = UpdateResponse.model_validate(_decode(load_sample, "update_success.json"))

        assert response.updated is True
        assert response.version == 2

    def test_delete_found(self, load_sample) -> None:
        from src.models.responses import DeleteResponse

        response = DeleteResponse.model_validate(_decode(load_sample, "delete_found.json"))

        assert response.deleted is True
        assert response.version == 8

    def test_delete_not_found(self, load_sample) -> None:
        from src.models.responses import DeleteResponse

        response = DeleteResponse.model_validate(_decode(load_sample, "delete_not_found.json"))

        assert response.deleted is False

    def test_get_found_typed(self, load_sample) -> None:
        from src.models.responses import GetResponse

        response = GetResponse[Book].model_validate(_decode(load_sample, "get_found.json"))

        assert response.found is True
        assert response.document == Book(title="Carrot cultivation", pages=212)

    def test_get_found_untyped(self, load_sample) -> None:
        from src.models.responses import GetResponse

        response = GetResponse.model_validate(_decode(load_sample, "get_found.json"))

        assert response.document == {"title": "Carrot cultivation", "pages": 212}

    def test_get_not_found(self, load_sample) -> None:
        from src.models.responses import GetResponse

        response = GetResponse[Book].model_validate(_decode(load_sample, "get_not_found.json"))

        assert response.found is False
        assert response.document is None


class TestSearchResponse:
    def test_hits_and_total(self, load_sample) -> None:
        from src.models.responses import SearchResponse

        response = SearchResponse[Book].model_validate(_decode(load_sample, "search_hits.json"))

        assert response.took == 4
        assert response.total == 2
        assert response.shards.total == 5
        assert [hit.id for hit in response.iter_hits()] == ["1", "2"]
        assert response.documents()[1] == Book(title="Root vegetables", pages=98)
        assert response.aggregations["max_pages"]["value"] == 212.0

    def test_integer_total(self) -> None:
        from src.models.responses import SearchResponse

        response = SearchResponse.model_validate(
            {"took": 1, "hits": {"total": 0, "hits": []}}
        )

        assert response.total == 0
        assert response.documents() == []


class TestBulkResponse:
    def test_items(self, load_sample) -> None:
        from src.models.responses import BulkResponse

        response = BulkResponse.model_validate(_decode(load_sample, "bulk_errors.json"))
        items = list(response.iter_items())

        assert not response.is_ok()
        assert [item.action for item in items] == ["index", "update"]
        assert items[0].ok
        assert items[0].api_error() is None

    def test_failed_item_error_is_classified(self, load_sample) -> None:
        from src.core.exceptions import DocumentMissingError
        from src.models.responses import BulkResponse

        response = BulkResponse.model_validate(_decode(load_sample, "bulk_errors.json"))
        (failed,) = response.failed_items()
        error = failed.api_error()

        assert failed.id == "7"
        assert failed.status == 404
        assert isinstance(error, DocumentMissingError)
        assert error.index == "books"
        assert error.status_code == 404

    def test_items_are_bulk_items(self, load_sample) -> None:
        from src.models.responses import BulkItem, BulkResponse

        response = BulkResponse.model_validate(_decode(load_sample, "bulk_errors.json"))

        assert all(isinstance(item, BulkItem) for item in response.items)
        assert response.items[1].action == "update"

    def test_errors_only_keeps_failed_items(self, load_sample) -> None:
        from src.core.exceptions import DocumentMissingError
        from src.models.responses import BulkErrorsResponse

        response = BulkErrorsResponse.model_validate(_decode(load_sample, "bulk_errors.json"))

        assert [item.id for item in response.items] == ["7"]
        assert response.errors is True
        assert isinstance(response.items[0].api_error(), DocumentMissingError)


class TestSqlResponse:
    def test_rows_paired_with_columns(self, load_sample) -> None:
        from src.models.responses import SqlResponse

        response = SqlResponse.model_validate(_decode(load_sample, "sql_rows.json"))

        assert [column.type for column in response.columns] == ["text", "long"]
        assert list(response.iter_rows()) == [
            {"title": "Carrot cultivation", "pages": 212},
            {"title": "Root vegetables", "pages": 98},
        ]
        assert response.cursor is not None

    def test_last_page_has_no_cursor(self) -> None:
        from src.models.responses import SqlResponse

        response = SqlResponse.model_validate({"rows": [[1]]})

        assert response.cursor is None
        assert list(response.iter_rows()) == [{}]
