"""各エンドポイントのクエリパラメータと、それを組み立てるビルダー。"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Self, TypeVar

from twitch_client.core.paging import MAX_LIMIT, MIN_LIMIT, Paging, PagingOutOfRangeError
from twitch_client.core.query import QueryPair


class StreamType(str, Enum):
    """`StreamsParams` で絞り込むストリーム種別。"""

    ALL = "all"
    PLAYLIST = "playlist"
    LIVE = "live"


def _validate_limit(value: int) -> int:
    if not MIN_LIMIT <= value <= MAX_LIMIT:
        msg = f"limit must be between {MIN_LIMIT} and {MAX_LIMIT} (inclusive) but got {value}"
        raise PagingOutOfRangeError(msg)
    return value


def _validate_offset(value: int) -> int:
    if value < 0:
        msg = f"offset must not be negative but got {value}"
        raise PagingOutOfRangeError(msg)
    return value


P = TypeVar("P", "TopGamesParams", "StreamsParams", "FeaturedStreamsParams")


def _with_paging(params: P, paging: Paging) -> P:
    return replace(params, offset=paging.offset, limit=paging.limit)


def _check_paging_fields(offset: int | None, limit: int | None) -> None:
    if offset is not None:
        _validate_offset(offset)
    if limit is not None:
        _validate_limit(limit)


@dataclass(slots=True, frozen=True)
class TopGamesParams:
    """`/games/top` のパラメータ。

    Twitch 側の既定値は offset=0, limit=10。
    """

    offset: int | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        _check_paging_fields(self.offset, self.limit)

    def to_query_pairs(self) -> tuple[QueryPair, ...]:
        return (("offset", self.offset), ("limit", self.limit))

    def with_paging(self, paging: Paging) -> TopGamesParams:
        return _with_paging(self, paging)


@dataclass(slots=True, frozen=True)
class StreamsParams:
    """`/streams` のパラメータ。

    channels は `channel=a,b` の 1 パラメータにまとめて送る。
    Twitch 側の既定値は offset=0, limit=25、その他は絞り込みなし。
    """

    game: str | None = None
    channels: tuple[str, ...] = ()
    offset: int | None = None
    limit: int | None = None
    client_id: str | None = None
    stream_type: StreamType | None = None

    def __post_init__(self) -> None:
        _check_paging_fields(self.offset, self.limit)
        object.__setattr__(self, "channels", tuple(self.channels))

    def to_query_pairs(self) -> tuple[QueryPair, ...]:
        return (
            ("game", self.game),
            ("channel", self.channels),
            ("offset", self.offset),
            ("limit", self.limit),
            ("client_id", self.client_id),
            ("stream_type", self.stream_type),
        )

    def with_paging(self, paging: Paging) -> StreamsParams:
        return _with_paging(self, paging)


@dataclass(slots=True, frozen=True)
class FeaturedStreamsParams:
    """`/streams/featured` のパラメータ。Twitch 側の既定値は offset=0, limit=25。"""

    offset: int | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        _check_paging_fields(self.offset, self.limit)

    def to_query_pairs(self) -> tuple[QueryPair, ...]:
        return (("offset", self.offset), ("limit", self.limit))

    def with_paging(self, paging: Paging) -> FeaturedStreamsParams:
        return _with_paging(self, paging)


@dataclass(slots=True, frozen=True)
class StreamsSummaryParams:
    """`/streams/summary` のパラメータ。"""

    game: str | None = None

    def to_query_pairs(self) -> tuple[QueryPair, ...]:
        return (("game", self.game),)


class _PagingBuilderMixin:
    _offset: int | None
    _limit: int | None

    def offset(self, value: int) -> Self:
        self._offset = _validate_offset(value)
        return self

    def limit(self, value: int) -> Self:
        self._limit = _validate_limit(value)
        return self

    def paging(self, paging: Paging) -> Self:
        self._offset = paging.offset
        self._limit = paging.limit
        return self


class TopGamesParamsBuilder(_PagingBuilderMixin):
    """`TopGamesParams` を組み立てるビルダー。"""

    def __init__(self) -> None:
        self._offset: int | None = None
        self._limit: int | None = None

    def build(self) -> TopGamesParams:
        return TopGamesParams(offset=self._offset, limit=self._limit)


class FeaturedStreamsParamsBuilder(_PagingBuilderMixin):
    """`FeaturedStreamsParams` を組み立てるビルダー。"""

    def __init__(self) -> None:
        self._offset: int | None = None
        self._limit: int | None = None

    def build(self) -> FeaturedStreamsParams:
        return FeaturedStreamsParams(offset=self._offset, limit=self._limit)


class StreamsParamsBuilder(_PagingBuilderMixin):
    """`StreamsParams` を組み立てるビルダー。"""

    def __init__(self) -> None:
        self._game: str | None = None
        self._channels: list[str] = []
        self._offset: int | None = None
        self._limit: int | None = None
        self._client_id: str | None = None
        self._stream_type: StreamType | None = None

    def game(self, game: str) -> StreamsParamsBuilder:
        if game:
            self._game = game
        return self

    def channel(self, channel: str) -> StreamsParamsBuilder:
        if channel:
            self._channels.append(channel)
        return self

    def channels(self, channels: Iterable[str]) -> StreamsParamsBuilder:
        """チャンネル一覧を置き換える。空を渡すと既定 (全チャンネル) に戻る。"""

        self._channels = [channel for channel in channels if channel]
        return self

    def client_id(self, client_id: str) -> StreamsParamsBuilder:
        if client_id:
            self._client_id = client_id
        return self

    def stream_type(self, stream_type: StreamType) -> StreamsParamsBuilder:
        self._stream_type = stream_type
        return self

    def build(self) -> StreamsParams:
        return StreamsParams(
            game=self._game,
            channels=tuple(self._channels),
            offset=self._offset,
            limit=self._limit,
            client_id=self._client_id,
            stream_type=self._stream_type,
        )


class StreamsSummaryParamsBuilder:
    """`StreamsSummaryParams` を組み立てるビルダー。"""

    def __init__(self) -> None:
        self._game: str | None = None

    def game(self, game: str) -> StreamsSummaryParamsBuilder:
        if game:
            self._game = game
        return self

    def build(self) -> StreamsSummaryParams:
        return StreamsSummaryParams(game=self._game)


__all__ = [
    "FeaturedStreamsParams",
    "FeaturedStreamsParamsBuilder",
    "StreamType",
    "StreamsParams",
    "StreamsParamsBuilder",
    "StreamsSummaryParams",
    "StreamsSummaryParamsBuilder",
    "TopGamesParams",
    "TopGamesParamsBuilder",
]
