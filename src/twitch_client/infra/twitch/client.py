"""読み取り専用の Twitch API (v3) クライアント。"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar
from urllib.parse import quote

import httpx

from twitch_client.shared.config import AppSettings
from twitch_client.shared.logging import get_logger

from .dto import (
    BasicInfo,
    Channel,
    ChannelStream,
    FeaturedStreams,
    Ingests,
    Streams,
    StreamsSummary,
    TopGames,
    parse_basic_info,
    parse_channel,
    parse_channel_stream,
    parse_featured_streams,
    parse_ingests,
    parse_streams,
    parse_streams_summary,
    parse_top_games,
)
from .errors import TwitchDeserializationError
from .http import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    TwitchClientConfig,
    TwitchHttpClient,
)
from .params import (
    FeaturedStreamsParams,
    StreamsParams,
    StreamsSummaryParams,
    TopGamesParams,
)

T = TypeVar("T")


class TwitchClientProtocol(Protocol):
    """CLI 層から利用するためのプロトコル。"""

    def top_games(self, params: TopGamesParams | None = None) -> TopGames:
        """視聴者数順のゲーム一覧を取得する。"""

    def ingests(self) -> Ingests:
        """配信受付サーバー一覧を取得する。"""

    def basic_info(self) -> BasicInfo:
        """API ルートと認証状態を取得する。"""

    def stream(self, channel: str) -> ChannelStream:
        """チャンネルのストリームを取得する。"""

    def streams(self, params: StreamsParams | None = None) -> Streams:
        """条件に合うストリーム一覧を取得する。"""

    def featured_streams(self, params: FeaturedStreamsParams | None = None) -> FeaturedStreams:
        """おすすめストリーム一覧を取得する。"""

    def streams_summary(self, params: StreamsSummaryParams | None = None) -> StreamsSummary:
        """ストリームの集計を取得する。"""

    def channel(self, name: str) -> Channel:
        """チャンネル情報を取得する。"""


def _path_segment(value: str) -> str:
    if not value:
        msg = "path segment must not be empty"
        raise ValueError(msg)
    return quote(value, safe="")


class TwitchClient(TwitchClientProtocol):
    """Twitch API v3 の読み取り系エンドポイントをまとめたクライアント。

    レスポンス本文は各 DTO へ変換して返す。変換に失敗した場合は
    `TwitchDeserializationError`、それ以外の失敗は `TwitchHttpClient` の例外がそのまま伝播する。
    """

    def __init__(self, *, http_client: TwitchHttpClient | None = None, logger=None) -> None:
        self._logger = logger or get_logger(__name__)
        self._http = http_client or TwitchHttpClient(logger=self._logger)

    @property
    def config(self) -> TwitchClientConfig:
        return self._http.config

    def top_games(self, params: TopGamesParams | None = None) -> TopGames:
        payload = self._http.get_content_with_params("/games/top", params or TopGamesParams())
        return self._decode(payload, parse_top_games, endpoint="games/top")

    def ingests(self) -> Ingests:
        payload = self._http.get_content("/ingests")
        return self._decode(payload, parse_ingests, endpoint="ingests")

    def basic_info(self) -> BasicInfo:
        payload = self._http.get_content("/")
        return self._decode(payload, parse_basic_info, endpoint="root")

    def stream(self, channel: str) -> ChannelStream:
        payload = self._http.get_content(f"/streams/{_path_segment(channel)}")
        return self._decode(payload, parse_channel_stream, endpoint="streams/channel")

    def streams(self, params: StreamsParams | None = None) -> Streams:
        payload = self._http.get_content_with_params("/streams", params or StreamsParams())
        return self._decode(payload, parse_streams, endpoint="streams")

    def featured_streams(self, params: FeaturedStreamsParams | None = None) -> FeaturedStreams:
        payload = self._http.get_content_with_params(
            "/streams/featured", params or FeaturedStreamsParams()
        )
        return self._decode(payload, parse_featured_streams, endpoint="streams/featured")

    def streams_summary(self, params: StreamsSummaryParams | None = None) -> StreamsSummary:
        payload = self._http.get_content_with_params(
            "/streams/summary", params or StreamsSummaryParams()
        )
        return self._decode(payload, parse_streams_summary, endpoint="streams/summary")

    def channel(self, name: str) -> Channel:
        payload = self._http.get_content(f"/channels/{_path_segment(name)}")
        return self._decode(payload, parse_channel, endpoint="channels")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TwitchClient:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _decode(self, payload: str, parser: Callable[[str], T], *, endpoint: str) -> T:
        try:
            return parser(payload)
        except (ValueError, OverflowError, RecursionError) as exc:
            self._logger.error("twitch_deserialization_failed", endpoint=endpoint, error=str(exc))
            msg = f"Failed to parse Twitch response ({endpoint}): {exc}"
            raise TwitchDeserializationError(msg) from exc


class TwitchClientBuilder:
    """`TwitchClient` を組み立てるビルダー。

    client_id を設定しないと匿名アクセスとなり、Twitch のレート制限を受けやすい。
    """

    def __init__(self) -> None:
        self._client_id: str | None = None
        self._base_url = DEFAULT_BASE_URL
        self._timeout = DEFAULT_TIMEOUT_SECONDS
        self._verify_tls = True
        self._overridden: list[str] = []
        self._http_client: httpx.Client | None = None
        self._logger = None

    def client_id(self, client_id: str) -> TwitchClientBuilder:
        if client_id:
            self._client_id = client_id
        return self

    def base_url(self, base_url: str) -> TwitchClientBuilder:
        if base_url:
            self._base_url = base_url
        return self

    def timeout(self, seconds: float) -> TwitchClientBuilder:
        self._timeout = seconds
        self._overridden.append("timeout")
        return self

    def verify_tls(self, verify: bool) -> TwitchClientBuilder:
        self._verify_tls = verify
        self._overridden.append("verify_tls")
        return self

    def http_client(self, client: httpx.Client) -> TwitchClientBuilder:
        """独自に設定した `httpx.Client` を使う。

        timeout/verify_tls はそのクライアント側で設定する。`timeout()` や `verify_tls()` と
        併用すると `build()` が ValueError を送出する。
        """

        self._http_client = client
        return self

    def logger(self, logger) -> TwitchClientBuilder:
        self._logger = logger
        return self

    def build(self) -> TwitchClient:
        if self._http_client is not None and self._overridden:
            names = "/".join(dict.fromkeys(self._overridden))
            msg = f"{names} cannot be combined with an injected http client; configure it there"
            raise ValueError(msg)
        config = TwitchClientConfig(
            client_id=self._client_id,
            base_url=self._base_url,
            timeout=self._timeout,
            verify_tls=self._verify_tls,
        )
        logger = self._logger or get_logger(__name__)
        http_get = self._http_client.get if self._http_client is not None else None
        http_client = TwitchHttpClient(config, http_get=http_get, logger=logger)
        return TwitchClient(http_client=http_client, logger=logger)


def build_twitch_client(
    *,
    settings: AppSettings | None = None,
    logger=None,
) -> TwitchClient:
    """共有設定から Twitch クライアントを構築するファクトリ。"""

    config = TwitchClientConfig.from_settings(settings)
    client_logger = logger or get_logger(__name__)
    http_client = TwitchHttpClient(config, logger=client_logger)
    return TwitchClient(http_client=http_client, logger=client_logger)


__all__ = [
    "TwitchClient",
    "TwitchClientBuilder",
    "TwitchClientProtocol",
    "build_twitch_client",
]
