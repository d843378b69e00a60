"""レスポンスに埋め込まれた `_links` を扱うヘルパー。"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, Protocol

from twitch_client.shared.exceptions import ContractViolationError


class LinkRelation(str, Enum):
    """Twitch API が返すリンクの関係名。"""

    SELF = "self"
    NEXT = "next"
    FEATURED = "featured"
    SUMMARY = "summary"
    FOLLOWED = "followed"
    CHANNEL = "channel"
    CHANNELS = "channels"
    USER = "user"
    USERS = "users"
    CHAT = "chat"
    STREAMS = "streams"
    INGESTS = "ingests"
    TEAMS = "teams"
    SEARCH = "search"
    FOLLOWS = "follows"
    COMMERCIAL = "commercial"
    STREAM_KEY = "stream_key"
    FEATURES = "features"
    SUBSCRIPTIONS = "subscriptions"
    EDITORS = "editors"
    VIDEOS = "videos"


class MissingLinkError(ContractViolationError):
    """必須リンクがレスポンスに存在しない。"""

    def __init__(self, relation: str, available: tuple[str, ...]) -> None:
        self.relation = relation
        self.available = available
        listed = ", ".join(available) or "-"
        super().__init__(f"Expected link '{relation}' but got: {listed}")


def _relation_name(relation: str | LinkRelation) -> str:
    return relation.value if isinstance(relation, LinkRelation) else relation


class Links(Mapping[str, str]):
    """関係名から絶対 URL への不変マッピング。

    リンクの有無はエンドポイントと認証状態によって変わる。必須リンクは `expected`、
    認証時のみ返るリンクなどは `optional` で取得する。
    """

    __slots__ = ("_links",)

    def __init__(self, links: Mapping[str, str] | None = None) -> None:
        self._links: dict[str, str] = dict(links or {})

    @classmethod
    def from_payload(cls, raw: Any) -> Links:
        """JSON の `_links` オブジェクトから生成する。未指定なら空。"""

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError("`_links` must be an object")
        for key, value in raw.items():
            if not isinstance(value, str):
                msg = f"Link '{key}' must be a string"
                raise ValueError(msg)
        return cls(raw)

    def expected(self, relation: str | LinkRelation) -> str:
        """必須リンクを返す。存在しない場合は API 契約違反として失敗する。"""

        name = _relation_name(relation)
        try:
            return self._links[name]
        except KeyError:
            raise MissingLinkError(name, tuple(sorted(self._links))) from None

    def optional(self, relation: str | LinkRelation) -> str | None:
        """任意リンクを返す。存在しなければ None。"""

        return self._links.get(_relation_name(relation))

    def __getitem__(self, key: str) -> str:
        return self._links[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Links):
            return dict(self._links) == dict(other._links)
        if isinstance(other, Mapping):
            return dict(self._links) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._links.items()))

    def __repr__(self) -> str:
        return f"Links({dict(self._links)!r})"


class HasLinks(Protocol):
    """`_links` を保持するレスポンスエンベロープ。"""

    links: Links


__all__ = [
    "HasLinks",
    "LinkRelation",
    "Links",
    "MissingLinkError",
]
