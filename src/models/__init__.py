"""Models Package.

Wire request descriptors, endpoint factories and typed response models.
"""

from src.models.requests import HttpMethod, WireRequest
from src.models.responses import (
    BulkErrorsResponse,
    BulkItem,
    BulkResponse,
    CommandResponse,
    DeleteResponse,
    GetResponse,
    Hit,
    Hits,
    IndexResponse,
    IndicesExistsResponse,
    ParseMode,
    PingResponse,
    ResponseModel,
    SearchResponse,
    ShardsInfo,
    SqlColumn,
    SqlResponse,
    UpdateResponse,
)

__all__ = [
    # Requests
    "HttpMethod",
    "WireRequest",
    # Responses
    "BulkItem",
    "BulkErrorsResponse",
    "BulkResponse",
    "CommandResponse",
    "DeleteResponse",
    "GetResponse",
    "Hit",
    "Hits",
    "IndexResponse",
    "IndicesExistsResponse",
    "ParseMode",
    "PingResponse",
    "ResponseModel",
    "SearchResponse",
    "ShardsInfo",
    "SqlColumn",
    "SqlResponse",
    "UpdateResponse",
]
