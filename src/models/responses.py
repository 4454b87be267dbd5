"""
Response Models

Typed results for the service's operations. Each model declares how its
response is parsed (ParseMode) and which HTTP statuses count as a
successful response for it, so the classifier can tell a document that was
legitimately not found (404 with a body) from a structured failure.

Pattern: Pydantic models as decoding schema, generic over the document type
"""

from enum import Enum
from typing import Any, ClassVar, Generic, Iterator, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.exceptions import ApiError


DocumentT = TypeVar("DocumentT")


class ParseMode(str, Enum):
    """
    How a response body is decoded.

    STRUCTURED: decode JSON into the response model, after checking for an
        embedded error envelope.
    STATUS_ONLY: the body is ignored; 200 and 404 map to a boolean.
    """

    STRUCTURED = "structured"
    STATUS_ONLY = "status_only"


class ResponseModel(BaseModel):
    """
    Base class for typed responses.

    Class attributes:
        parse_mode: Decoding mode used by the classifier.
        extra_ok_statuses: Statuses outside 200-299 that still carry a
            successful response body for this operation.
    """

    parse_mode: ClassVar[ParseMode] = ParseMode.STRUCTURED
    extra_ok_statuses: ClassVar[frozenset[int]] = frozenset()

    model_config = {"extra": "allow", "populate_by_name": True}

    @classmethod
    def accepts_status(cls, status_code: int) -> bool:
        """Whether ``status_code`` can carry a successful body of this type."""
        return 200 <= status_code < 300 or status_code in cls.extra_ok_statuses

    @classmethod
    def from_status(cls, found: bool) -> "ResponseModel":
        """
        Build a status-only response.

        Only STATUS_ONLY types override this; the classifier never calls it
        for STRUCTURED types.
        """
        raise NotImplementedError(f"{cls.__name__} is not a status-only response")


# =============================================================================
# Shared Fragments
# =============================================================================


class ShardsInfo(BaseModel):
    """Shard statistics returned with write and search responses."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0


class PingVersion(BaseModel):
    number: str
    build_hash: Optional[str] = None
    lucene_version: Optional[str] = None


# =============================================================================
# Cluster and Index Commands
# =============================================================================


class PingResponse(ResponseModel):
    """Basic information about the node that served the request."""

    name: str
    cluster_name: str
    cluster_uuid: Optional[str] = None
    version: PingVersion
    tagline: Optional[str] = None


class CommandResponse(ResponseModel):
    """
    Response for commands that only acknowledge, e.g. creating or deleting
    an index.
    """

    acknowledged: bool


class IndicesExistsResponse(ResponseModel):
    """
    Whether an index exists.

    Parsed from the status code alone: 200 means it exists, 404 that it
    does not.
    """

    parse_mode: ClassVar[ParseMode] = ParseMode.STATUS_ONLY

    exists: bool

    @classmethod
    def from_status(cls, found: bool) -> "IndicesExistsResponse":
        return cls(exists=found)


# =============================================================================
# Document Operations
# =============================================================================


class _DocumentWriteResponse(ResponseModel):
    """Common fields of index, update and delete responses."""

    index: str = Field(..., alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(..., alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    result: Optional[str] = None
    shards: Optional[ShardsInfo] = Field(default=None, alias="_shards")
    seq_no: Optional[int] = Field(default=None, alias="_seq_no")
    primary_term: Optional[int] = Field(default=None, alias="_primary_term")


class IndexResponse(_DocumentWriteResponse):
    """Response to indexing a document."""

    created: bool = False

    @model_validator(mode="before")
    @classmethod
    def derive_created(cls, data: Any) -> Any:
        """Older servers send ``created``; newer ones send ``result``."""
        if isinstance(data, dict) and "created" not in data:
            data = {**data, "created": data.get("result") == "created"}
        return data


class UpdateResponse(_DocumentWriteResponse):
    """Response to a partial document update."""

    @property
    def updated(self) -> bool:
        return self.result == "updated"


class DeleteResponse(_DocumentWriteResponse):
    """
    Response to deleting a document.

    A missing document is reported with status 404 and a regular body, so
    404 is accepted here.
    """

    extra_ok_statuses: ClassVar[frozenset[int]] = frozenset({404})

    found: Optional[bool] = None

    @property
    def deleted(self) -> bool:
        if self.result is not None:
            return self.result == "deleted"
        return bool(self.found)


class GetResponse(ResponseModel, Generic[DocumentT]):
    """
    Response to fetching a document by id.

    Parametrize with a document type to decode the source,
    e.g. ``GetResponse[MyDocument]``.
    """

    extra_ok_statuses: ClassVar[frozenset[int]] = frozenset({404})

    index: str = Field(..., alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(..., alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    found: bool
    source: Optional[DocumentT] = Field(default=None, alias="_source")

    @property
    def document(self) -> Optional[DocumentT]:
        """The document, or None when it was not found."""
        return self.source if self.found else None


# =============================================================================
# Search
# =============================================================================


class Hit(BaseModel, Generic[DocumentT]):
    index: str = Field(..., alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(..., alias="_id")
    score: Optional[float] = Field(default=None, alias="_score")
    source: Optional[DocumentT] = Field(default=None, alias="_source")
    highlight: Optional[dict[str, list[str]]] = None
    sort: Optional[list[Any]] = None

    model_config = {"populate_by_name": True}


class Hits(BaseModel, Generic[DocumentT]):
    total: int = 0
    max_score: Optional[float] = None
    hits: list[Hit[DocumentT]] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def normalise_total(cls, v: Any) -> Any:
        """Newer servers report ``{"value": n, "relation": "eq"}``."""
        if isinstance(v, dict):
            return v.get("value", 0)
        return v


class SearchResponse(ResponseModel, Generic[DocumentT]):
    """
    Response to a search request.

    Example:
        >>> response = parse(SearchResponse[MyDocument], status, body)
        >>> for doc in response.documents():
        ...     print(doc.title)
    """

    took: int
    timed_out: bool = False
    shards: Optional[ShardsInfo] = Field(default=None, alias="_shards")
    hits: Hits[DocumentT]
    aggregations: dict[str, Any] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.hits.total

    def iter_hits(self) -> Iterator[Hit[DocumentT]]:
        return iter(self.hits.hits)

    def documents(self) -> list[DocumentT]:
        """Sources of all hits that carry one."""
        return [hit.source for hit in self.hits.hits if hit.source is not None]


# =============================================================================
# Bulk
# =============================================================================


class BulkItem(BaseModel):
    """The outcome of one operation inside a bulk request."""

    action: str
    index: str = Field(..., alias="_index")
    id: Optional[str] = Field(default=None, alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    status: int
    result: Optional[str] = None
    error: Any = None

    model_config = {"populate_by_name": True, "extra": "allow"}

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300

    def api_error(self) -> Optional[ApiError]:
        """The item's error classified like a top-level error envelope."""
        from src.parsing.api_errors import parse_api_error

        if self.error is None:
            return None
        return parse_api_error(self.error, self.status)


class BulkResponse(ResponseModel):
    """
    Response to a bulk request.

    The request as a whole succeeds with status 200 even when individual
    operations fail; check ``errors`` and ``failed_items()``.
    """

    took: int
    errors: bool
    items: list[BulkItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def flatten_items(cls, v: Any) -> Any:
        """The server wraps each item as ``{action: {...}}``."""
        if not isinstance(v, list):
            return v
        flattened = []
        for entry in v:
            if isinstance(entry, dict) and len(entry) == 1:
                action, result = next(iter(entry.items()))
                if isinstance(result, dict):
                    entry = {"action": action, **result}
            flattened.append(entry)
        return flattened

    def iter_items(self) -> Iterator[BulkItem]:
        return iter(self.items)

    def failed_items(self) -> list[BulkItem]:
        return [item for item in self.iter_items() if not item.ok]

    def is_ok(self) -> bool:
        return not self.errors


class BulkErrorsResponse(BulkResponse):
    """
    Bulk response that keeps only the failed items.

    The items that succeeded are dropped while parsing.
    """

    @field_validator("items", mode="after")
    @classmethod
    def keep_failed(cls, v: list[BulkItem]) -> list[BulkItem]:
        return [item for item in v if not item.ok]


# =============================================================================
# SQL
# =============================================================================


class SqlColumn(BaseModel):
    name: str
    type: str


class SqlResponse(ResponseModel):
    """
    Response to an SQL query.

    Rows are positional; ``iter_rows`` pairs them with the column names.
    ``cursor`` is set when more pages are available.
    """

    columns: list[SqlColumn] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    cursor: Optional[str] = None

    def iter_rows(self) -> Iterator[dict[str, Any]]:
        names = [column.name for column in self.columns]
        for row in self.rows:
            yield dict(zip(names, row))
