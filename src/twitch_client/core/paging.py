"""offset/limit によるページングカーソル。"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from twitch_client.core.links import LinkRelation, Links
from twitch_client.core.query import QueryPair
from twitch_client.shared.exceptions import ContractViolationError, DomainError

MIN_LIMIT = 1
MAX_LIMIT = 100


class PagingOutOfRangeError(DomainError, ValueError):
    """offset/limit が許容範囲外。"""

    default_message = f"limit must be between {MIN_LIMIT} and {MAX_LIMIT} (inclusive)"


class PagingLinkError(ContractViolationError):
    """ページングリンクが解釈できない。"""

    def __init__(self, link: str, reason: str) -> None:
        self.link = link
        super().__init__(f"Expected a paged link but got: {link} ({reason})")


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(slots=True, frozen=True)
class Paging:
    """ページ位置 (offset, limit)。

    両方未指定の場合は「サーバーのデフォルトに任せる」を意味し、クエリ文字列には一切現れない。
    片方だけの指定は許容しない。
    """

    offset: int | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        if (self.offset is None) != (self.limit is None):
            msg = "offset and limit must be specified together"
            raise PagingOutOfRangeError(msg)
        if self.limit is None:
            return
        if not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            raise PagingOutOfRangeError(
                f"limit must be between {MIN_LIMIT} and {MAX_LIMIT} (inclusive) but got {self.limit}"
            )
        if self.offset is not None and self.offset < 0:
            msg = f"offset must not be negative but got {self.offset}"
            raise PagingOutOfRangeError(msg)

    @classmethod
    def default(cls) -> Paging:
        return cls()

    @classmethod
    def of(cls, offset: int, limit: int) -> Paging:
        return cls(offset=offset, limit=limit)

    @classmethod
    def from_url(cls, url: str) -> Paging | None:
        """リンク URL のクエリからカーソルを復元する。

        `limit` があるときだけページングとみなし、`offset` が無ければ 0 とする。
        `offset` しか無いリンクは None (ページングなし) を返す。

        Raises:
            httpx.InvalidURL: URL として解釈できない場合。
            PagingOutOfRangeError: limit/offset が範囲外の場合。
        """

        params = httpx.URL(url).params
        limit = _parse_int(params.get("limit"))
        if limit is None:
            return None
        offset = _parse_int(params.get("offset"))
        return cls(offset=0 if offset is None else offset, limit=limit)

    @property
    def is_default(self) -> bool:
        return self.limit is None

    def to_query_pairs(self) -> tuple[QueryPair, ...]:
        if self.is_default:
            return ()
        return (("offset", self.offset), ("limit", self.limit))

    def next_page(self) -> Paging:
        """同じ limit で次のページを指すカーソル。"""

        if self.offset is None or self.limit is None:
            msg = "default paging has no explicit position"
            raise PagingOutOfRangeError(msg)
        return Paging(offset=self.offset + self.limit, limit=self.limit)


def _paging_from_link(link: str) -> Paging:
    try:
        paging = Paging.from_url(link)
    except httpx.InvalidURL as exc:
        raise PagingLinkError(link, f"invalid url: {exc}") from exc
    except PagingOutOfRangeError as exc:
        raise PagingLinkError(link, f"out of range: {exc}") from exc
    if paging is None:
        raise PagingLinkError(link, "no paging parameters")
    return paging


def paging_from_links(links: Links) -> Paging:
    """`self` リンクから現在ページのカーソルを復元する。"""

    return _paging_from_link(links.expected(LinkRelation.SELF))


def next_paging_from_links(links: Links) -> Paging:
    """`next` リンクから次ページのカーソルを復元する。"""

    return _paging_from_link(links.expected(LinkRelation.NEXT))


__all__ = [
    "MAX_LIMIT",
    "MIN_LIMIT",
    "Paging",
    "PagingLinkError",
    "PagingOutOfRangeError",
    "next_paging_from_links",
    "paging_from_links",
]
