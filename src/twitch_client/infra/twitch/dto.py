"""Twitch API レスポンスの DTO と JSON からの変換。

各エンベロープは `_links` を `Links` として保持し、リンクの取得はそれに委譲する。
必須 (expected) と任意 (optional) の区別はエンドポイントのドキュメントに従う。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from twitch_client.core.links import LinkRelation, Links
from twitch_client.core.paging import Paging, next_paging_from_links, paging_from_links
from twitch_client.shared.types import DTO, LocaleString, UrlString, parse_iso_datetime


@dataclass(slots=True)
class ImageLinks(DTO):
    """サイズ別の画像 URL。template の `{width}x{height}` を置換すると任意サイズになる。"""

    large: UrlString
    medium: UrlString
    small: UrlString
    template: UrlString

    def sized(self, width: int, height: int) -> UrlString:
        return self.template.replace("{width}", str(width)).replace("{height}", str(height))


@dataclass(slots=True)
class Game(DTO):
    """ゲーム (カテゴリ) の情報。"""

    id: int
    name: str
    giantbomb_id: int | None
    box: ImageLinks
    logo: ImageLinks
    links: Links = field(default_factory=Links)


@dataclass(slots=True)
class GameInfo(DTO):
    """ゲームの現在の視聴状況。"""

    viewers: int
    channels: int
    game: Game


@dataclass(slots=True)
class TopGames(DTO):
    """視聴者数の多い順に並んだゲーム一覧。"""

    total: int
    top: tuple[GameInfo, ...]
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)

    def link_next(self) -> str:
        return self.links.expected(LinkRelation.NEXT)

    def paging(self) -> Paging:
        return paging_from_links(self.links)

    def next_paging(self) -> Paging:
        return next_paging_from_links(self.links)


@dataclass(slots=True)
class Ingest(DTO):
    """RTMP の配信受付サーバー。"""

    id: int
    name: str
    availability: float
    default: bool
    url_template: str

    def url_for(self, stream_key: str) -> str:
        return self.url_template.replace("{stream_key}", stream_key)


@dataclass(slots=True)
class Ingests(DTO):
    ingests: tuple[Ingest, ...]
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)


@dataclass(slots=True)
class Authorization(DTO):
    scopes: tuple[str, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class Token(DTO):
    """認証トークンの状態。未認証の場合 valid=False で他は None。"""

    valid: bool
    user_name: str | None = None
    authorization: Authorization | None = None


@dataclass(slots=True)
class BasicInfo(DTO):
    """API ルートの情報と認証状態。

    users/channels/chat のリンクは認証済みの場合にのみ返る。
    """

    token: Token
    links: Links = field(default_factory=Links)

    def link_user(self) -> str:
        return self.links.expected(LinkRelation.USER)

    def link_channel(self) -> str:
        return self.links.expected(LinkRelation.CHANNEL)

    def link_search(self) -> str:
        return self.links.expected(LinkRelation.SEARCH)

    def link_streams(self) -> str:
        return self.links.expected(LinkRelation.STREAMS)

    def link_ingests(self) -> str:
        return self.links.expected(LinkRelation.INGESTS)

    def link_teams(self) -> str:
        return self.links.expected(LinkRelation.TEAMS)

    def link_users(self) -> str | None:
        return self.links.optional(LinkRelation.USERS)

    def link_channels(self) -> str | None:
        return self.links.optional(LinkRelation.CHANNELS)

    def link_chat(self) -> str | None:
        return self.links.optional(LinkRelation.CHAT)


@dataclass(slots=True)
class Channel(DTO):
    """チャンネル情報。"""

    id: int
    name: str
    display_name: str
    language: LocaleString
    created_at: datetime
    updated_at: datetime
    partner: bool
    url: UrlString
    views: int
    followers: int
    game: str | None = None
    status: str | None = None
    mature: bool | None = None
    delay: int | None = None
    broadcaster_language: LocaleString | None = None
    logo: UrlString | None = None
    banner: UrlString | None = None
    video_banner: UrlString | None = None
    background: UrlString | None = None
    profile_banner: UrlString | None = None
    profile_banner_background_color: str | None = None
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)

    def link_follows(self) -> str:
        return self.links.expected(LinkRelation.FOLLOWS)

    def link_commercial(self) -> str:
        return self.links.expected(LinkRelation.COMMERCIAL)

    def link_stream_key(self) -> str:
        return self.links.expected(LinkRelation.STREAM_KEY)

    def link_chat(self) -> str:
        return self.links.expected(LinkRelation.CHAT)

    def link_features(self) -> str:
        return self.links.expected(LinkRelation.FEATURES)

    def link_subscriptions(self) -> str:
        return self.links.expected(LinkRelation.SUBSCRIPTIONS)

    def link_editors(self) -> str:
        return self.links.expected(LinkRelation.EDITORS)

    def link_teams(self) -> str:
        return self.links.expected(LinkRelation.TEAMS)

    def link_videos(self) -> str:
        return self.links.expected(LinkRelation.VIDEOS)


@dataclass(slots=True)
class Stream(DTO):
    """配信中のストリーム。"""

    id: int
    viewers: int
    average_fps: float
    video_height: int
    created_at: datetime
    channel: Channel
    preview: ImageLinks
    game: str | None = None
    delay: int | None = None
    is_playlist: bool = False
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)


@dataclass(slots=True)
class Streams(DTO):
    """視聴者数の多い順に並んだストリーム一覧。"""

    total: int
    streams: tuple[Stream, ...]
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)

    def link_next(self) -> str:
        return self.links.expected(LinkRelation.NEXT)

    def link_featured(self) -> str:
        return self.links.expected(LinkRelation.FEATURED)

    def link_summary(self) -> str:
        return self.links.expected(LinkRelation.SUMMARY)

    def link_followed(self) -> str:
        return self.links.expected(LinkRelation.FOLLOWED)

    def paging(self) -> Paging:
        return paging_from_links(self.links)

    def next_paging(self) -> Paging:
        return next_paging_from_links(self.links)


@dataclass(slots=True)
class FeaturedStream(DTO):
    """プロモーション中のストリーム。text は HTML を含む。"""

    text: str
    image: UrlString
    title: str
    sponsored: bool
    priority: int
    scheduled: bool
    stream: Stream


@dataclass(slots=True)
class FeaturedStreams(DTO):
    featured: tuple[FeaturedStream, ...]
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)

    def link_next(self) -> str:
        return self.links.expected(LinkRelation.NEXT)

    def paging(self) -> Paging:
        return paging_from_links(self.links)

    def next_paging(self) -> Paging:
        return next_paging_from_links(self.links)


@dataclass(slots=True)
class ChannelStream(DTO):
    """特定チャンネルのストリーム。オフラインの場合 stream は None。"""

    stream: Stream | None
    links: Links = field(default_factory=Links)

    @property
    def is_live(self) -> bool:
        return self.stream is not None

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)

    def link_channel(self) -> str:
        return self.links.expected(LinkRelation.CHANNEL)


@dataclass(slots=True)
class StreamsSummary(DTO):
    viewers: int
    channels: int
    links: Links = field(default_factory=Links)

    def link_self(self) -> str:
        return self.links.expected(LinkRelation.SELF)


def load_json_object(payload: str) -> dict[str, Any]:
    """レスポンス本文を JSON オブジェクトとして読み込む。"""

    try:
        decoded = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON payload for Twitch response") from exc
    if not isinstance(decoded, dict):
        raise ValueError("Twitch JSON payload must be an object")
    return decoded


def _missing(key: str) -> ValueError:
    return ValueError(f"Required field `{key}` is missing")


def _wrong_type(key: str, expected: str) -> ValueError:
    return ValueError(f"Field `{key}` must be {expected}")


def _int(data: dict[str, Any], key: str) -> int:
    if key not in data:
        raise _missing(key)
    value = data[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise _wrong_type(key, "an integer")
    return value


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    if data.get(key) is None:
        return None
    return _int(data, key)


def _float(data: dict[str, Any], key: str) -> float:
    if key not in data:
        raise _missing(key)
    value = data[key]
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise _wrong_type(key, "a number")
    return float(value)


def _str(data: dict[str, Any], key: str) -> str:
    if key not in data:
        raise _missing(key)
    value = data[key]
    if not isinstance(value, str):
        raise _wrong_type(key, "a string")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    if data.get(key) is None:
        return None
    return _str(data, key)


def _bool(data: dict[str, Any], key: str) -> bool:
    if key not in data:
        raise _missing(key)
    value = data[key]
    if not isinstance(value, bool):
        raise _wrong_type(key, "a boolean")
    return value


def _optional_bool(data: dict[str, Any], key: str) -> bool | None:
    if data.get(key) is None:
        return None
    return _bool(data, key)


def _datetime(data: dict[str, Any], key: str) -> datetime:
    raw = _str(data, key)
    try:
        return parse_iso_datetime(raw)
    except ValueError as exc:
        raise _wrong_type(key, "an ISO 8601 datetime") from exc


def _object(data: dict[str, Any], key: str) -> dict[str, Any]:
    if key not in data:
        raise _missing(key)
    value = data[key]
    if not isinstance(value, dict):
        raise _wrong_type(key, "an object")
    return value


def _optional_object(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    if data.get(key) is None:
        return None
    return _object(data, key)


def _objects(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    if key not in data:
        raise _missing(key)
    values = data[key]
    if not isinstance(values, list):
        raise _wrong_type(key, "an array")
    for value in values:
        if not isinstance(value, dict):
            msg = f"Each `{key}` record must be an object"
            raise ValueError(msg)
    return values


def _links(data: dict[str, Any]) -> Links:
    return Links.from_payload(data.get("_links"))


def map_image_links(data: dict[str, Any]) -> ImageLinks:
    return ImageLinks(
        large=_str(data, "large"),
        medium=_str(data, "medium"),
        small=_str(data, "small"),
        template=_str(data, "template"),
    )


def map_game(data: dict[str, Any]) -> Game:
    return Game(
        id=_int(data, "_id"),
        name=_str(data, "name"),
        giantbomb_id=_optional_int(data, "giantbomb_id"),
        box=map_image_links(_object(data, "box")),
        logo=map_image_links(_object(data, "logo")),
        links=_links(data),
    )


def map_game_info(data: dict[str, Any]) -> GameInfo:
    return GameInfo(
        viewers=_int(data, "viewers"),
        channels=_int(data, "channels"),
        game=map_game(_object(data, "game")),
    )


def map_ingest(data: dict[str, Any]) -> Ingest:
    return Ingest(
        id=_int(data, "_id"),
        name=_str(data, "name"),
        availability=_float(data, "availability"),
        default=_bool(data, "default"),
        url_template=_str(data, "url_template"),
    )


def map_authorization(data: dict[str, Any]) -> Authorization:
    scopes = data.get("scopes")
    if not isinstance(scopes, list) or not all(isinstance(scope, str) for scope in scopes):
        raise _wrong_type("scopes", "an array of strings")
    return Authorization(
        scopes=tuple(scopes),
        created_at=_datetime(data, "created_at"),
        updated_at=_datetime(data, "updated_at"),
    )


def map_token(data: dict[str, Any]) -> Token:
    authorization = _optional_object(data, "authorization")
    return Token(
        valid=_bool(data, "valid"),
        user_name=_optional_str(data, "user_name"),
        authorization=map_authorization(authorization) if authorization is not None else None,
    )


def map_channel(data: dict[str, Any]) -> Channel:
    return Channel(
        id=_int(data, "_id"),
        name=_str(data, "name"),
        display_name=_str(data, "display_name"),
        language=_str(data, "language"),
        created_at=_datetime(data, "created_at"),
        updated_at=_datetime(data, "updated_at"),
        partner=_bool(data, "partner"),
        url=_str(data, "url"),
        views=_int(data, "views"),
        followers=_int(data, "followers"),
        game=_optional_str(data, "game"),
        status=_optional_str(data, "status"),
        mature=_optional_bool(data, "mature"),
        delay=_optional_int(data, "delay"),
        broadcaster_language=_optional_str(data, "broadcaster_language"),
        logo=_optional_str(data, "logo"),
        banner=_optional_str(data, "banner"),
        video_banner=_optional_str(data, "video_banner"),
        background=_optional_str(data, "background"),
        profile_banner=_optional_str(data, "profile_banner"),
        profile_banner_background_color=_optional_str(data, "profile_banner_background_color"),
        links=_links(data),
    )


def map_stream(data: dict[str, Any]) -> Stream:
    return Stream(
        id=_int(data, "_id"),
        viewers=_int(data, "viewers"),
        average_fps=_float(data, "average_fps"),
        video_height=_int(data, "video_height"),
        created_at=_datetime(data, "created_at"),
        channel=map_channel(_object(data, "channel")),
        preview=map_image_links(_object(data, "preview")),
        game=_optional_str(data, "game"),
        delay=_optional_int(data, "delay"),
        is_playlist=bool(_optional_bool(data, "is_playlist")),
        links=_links(data),
    )


def map_featured_stream(data: dict[str, Any]) -> FeaturedStream:
    return FeaturedStream(
        text=_str(data, "text"),
        image=_str(data, "image"),
        title=_str(data, "title"),
        sponsored=_bool(data, "sponsored"),
        priority=_int(data, "priority"),
        scheduled=_bool(data, "scheduled"),
        stream=map_stream(_object(data, "stream")),
    )


def parse_top_games(payload: str) -> TopGames:
    data = load_json_object(payload)
    return TopGames(
        total=_int(data, "_total"),
        top=tuple(map_game_info(item) for item in _objects(data, "top")),
        links=_links(data),
    )


def parse_ingests(payload: str) -> Ingests:
    data = load_json_object(payload)
    return Ingests(
        ingests=tuple(map_ingest(item) for item in _objects(data, "ingests")),
        links=_links(data),
    )


def parse_basic_info(payload: str) -> BasicInfo:
    data = load_json_object(payload)
    return BasicInfo(token=map_token(_object(data, "token")), links=_links(data))


def parse_channel(payload: str) -> Channel:
    return map_channel(load_json_object(payload))


def parse_channel_stream(payload: str) -> ChannelStream:
    data = load_json_object(payload)
    stream = _optional_object(data, "stream")
    return ChannelStream(
        stream=map_stream(stream) if stream is not None else None,
        links=_links(data),
    )


def parse_streams(payload: str) -> Streams:
    data = load_json_object(payload)
    return Streams(
        total=_int(data, "_total"),
        streams=tuple(map_stream(item) for item in _objects(data, "streams")),
        links=_links(data),
    )


def parse_featured_streams(payload: str) -> FeaturedStreams:
    data = load_json_object(payload)
    return FeaturedStreams(
        featured=tuple(map_featured_stream(item) for item in _objects(data, "featured")),
        links=_links(data),
    )


def parse_streams_summary(payload: str) -> StreamsSummary:
    data = load_json_object(payload)
    return StreamsSummary(
        viewers=_int(data, "viewers"),
        channels=_int(data, "channels"),
        links=_links(data),
    )


__all__ = [
    "Authorization",
    "BasicInfo",
    "Channel",
    "ChannelStream",
    "FeaturedStream",
    "FeaturedStreams",
    "Game",
    "GameInfo",
    "ImageLinks",
    "Ingest",
    "Ingests",
    "Stream",
    "Streams",
    "StreamsSummary",
    "Token",
    "TopGames",
    "load_json_object",
    "parse_basic_info",
    "parse_channel",
    "parse_channel_stream",
    "parse_featured_streams",
    "parse_ingests",
    "parse_streams",
    "parse_streams_summary",
    "parse_top_games",
]
