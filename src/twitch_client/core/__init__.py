"""I/O を持たないクエリ・リンク・ページング処理。"""

from .links import HasLinks, LinkRelation, Links, MissingLinkError
from .paging import (
    MAX_LIMIT,
    MIN_LIMIT,
    Paging,
    PagingLinkError,
    PagingOutOfRangeError,
    next_paging_from_links,
    paging_from_links,
)
from .query import QueryPair, QueryParams, QueryValue, encode_query, encode_value, to_query_string

__all__ = [
    "HasLinks",
    "LinkRelation",
    "Links",
    "MissingLinkError",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "Paging",
    "PagingLinkError",
    "PagingOutOfRangeError",
    "next_paging_from_links",
    "paging_from_links",
    "QueryPair",
    "QueryParams",
    "QueryValue",
    "encode_query",
    "encode_value",
    "to_query_string",
]
