"""エンドポイントパラメータをクエリ文字列へ変換するエンコーダ。

値は RFC 3986 の非予約文字以外をすべてパーセントエンコードする。空白は `+` ではなく
`%20` とし、`:` `,` `&` `=` `?` `/` `+` もエスケープ対象に含める。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Protocol, TypeAlias
from urllib.parse import quote

QueryScalar: TypeAlias = str | int | bool | Enum
QueryValue: TypeAlias = QueryScalar | Sequence[QueryScalar] | None
QueryPair: TypeAlias = tuple[str, QueryValue]

LIST_SEPARATOR = ","


class QueryParams(Protocol):
    """クエリ文字列へ変換可能なパラメータ。"""

    def to_query_pairs(self) -> tuple[QueryPair, ...]:
        """宣言順の (名前, 値) ペアを返す。値が None のものは省略対象。"""


def _render_scalar(value: QueryScalar) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render_value(value: QueryValue) -> str | None:
    if value is None:
        return None
    if isinstance(value, (str, int, bool, Enum)):
        rendered = _render_scalar(value)
    else:
        items = [_render_scalar(item) for item in value]
        rendered = LIST_SEPARATOR.join(items)
    return rendered or None


def encode_value(value: str) -> str:
    """単一の値をパーセントエンコードする。"""

    return quote(value, safe="")


def encode_query(pairs: Iterable[QueryPair]) -> str:
    """(名前, 値) ペアからクエリ文字列を組み立てる。

    値が 1 つもなければ空文字列、あれば `?` から始まり `&` で連結した文字列を返す。
    None・空文字列・空リストは指定なしとして扱い、`name=` の形でも出力しない。
    パラメータ名はエンコードしない。
    """

    parts: list[str] = []
    for name, value in pairs:
        rendered = _render_value(value)
        if rendered is None:
            continue
        parts.append(f"{name}={encode_value(rendered)}")

    if not parts:
        return ""
    return "?" + "&".join(parts)


def to_query_string(params: QueryParams) -> str:
    """`QueryParams` をクエリ文字列へ変換する。"""

    return encode_query(params.to_query_pairs())


__all__ = [
    "LIST_SEPARATOR",
    "QueryPair",
    "QueryParams",
    "QueryValue",
    "encode_query",
    "encode_value",
    "to_query_string",
]
