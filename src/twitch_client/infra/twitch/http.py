"""Twitch API への GET リクエストとレスポンス判定。"""

from __future__ import annotations

import ssl
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from twitch_client.core.query import QueryParams, to_query_string
from twitch_client.shared.config import AppSettings, get_settings
from twitch_client.shared.logging import get_logger

from .errors import (
    TwitchClientError,
    TwitchDeserializationError,
    TwitchServerError,
    TwitchTLSError,
    TwitchTransportError,
    TwitchUnauthorizedError,
    UnhandledResponseError,
)

DEFAULT_BASE_URL = "https://api.twitch.tv/kraken"
ACCEPT_MEDIA_TYPE = "application/vnd.twitchtv.v3+json"
CLIENT_ID_HEADER = "Client-ID"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(slots=True, frozen=True)
class TwitchClientConfig:
    """クライアント単位で共有する不変の接続設定。"""

    client_id: str | None = None
    base_url: str = DEFAULT_BASE_URL
    accept: str = ACCEPT_MEDIA_TYPE
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    verify_tls: bool = True

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = "timeout must be a positive number"
            raise ValueError(msg)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> TwitchClientConfig:
        target = settings or get_settings()
        twitch_settings = target.twitch
        return cls(
            client_id=twitch_settings.client_id or None,
            base_url=str(twitch_settings.base_url),
            timeout=twitch_settings.timeout_seconds,
            verify_tls=twitch_settings.verify_tls,
        )


def _is_tls_failure(exc: BaseException) -> bool:
    current: BaseException | None = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def wrap_transport_error(exc: httpx.RequestError) -> TwitchClientError:
    """httpx の通信例外を Twitch クライアントの例外へ変換する。"""

    if _is_tls_failure(exc):
        return TwitchTLSError(str(exc) or None)
    return TwitchTransportError(str(exc) or None)


def classify_response(response: httpx.Response, url: str) -> str:
    """レスポンスを判定し、成功なら本文を返す。

    200 のみを成功とし、本文を UTF-8 としてそのまま返す (JSON のデコードは呼び出し側)。
    401 は `TwitchUnauthorizedError`、5xx は `TwitchServerError`。
    それ以外の 2xx/4xx およびその他のステータスは API ドキュメントにない状態のため
    `UnhandledResponseError` で即座に失敗する。
    """

    status = response.status_code
    if response.is_success:
        if status != httpx.codes.OK:
            raise UnhandledResponseError(response, url)
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = "Response body is not valid UTF-8"
            raise TwitchDeserializationError(msg) from exc
    if response.is_client_error:
        if status == httpx.codes.UNAUTHORIZED:
            raise TwitchUnauthorizedError(url)
        raise UnhandledResponseError(response, url)
    if response.is_server_error:
        raise TwitchServerError(response)
    raise UnhandledResponseError(response, url)


class TwitchHttpClient:
    """ベース URL と既定ヘッダーを保持し、GET を 1 回だけ発行するクライアント。

    リトライやキャッシュは行わない。呼び出し間で共有する状態は不変の
    `TwitchClientConfig` のみなので、複数スレッドから同時に利用できる。
    """

    def __init__(
        self,
        config: TwitchClientConfig | None = None,
        *,
        http_get: Callable[..., httpx.Response] | None = None,
        logger=None,
    ) -> None:
        self.config = config or TwitchClientConfig()
        self._owned_client: httpx.Client | None = None
        if http_get is None:
            self._owned_client = httpx.Client(
                timeout=self.config.timeout,
                verify=self.config.verify_tls,
            )
            http_get = self._owned_client.get
        self._http_get = http_get
        self._logger = logger or get_logger(__name__)

    def get_content(self, relative_url: str) -> str:
        """相対パスのリソースを取得し、本文を返す。"""

        return self._get_content_from_url(self.build_url(relative_url))

    def get_content_with_params(self, relative_url: str, params: QueryParams | str) -> str:
        """クエリパラメータ付きで相対パスのリソースを取得する。

        `params` は `QueryParams` か、エンコード済みのクエリ文字列 (`?a=1` 形式) を受け付ける。
        """

        query = params if isinstance(params, str) else to_query_string(params)
        return self._get_content_from_url(self.build_url(relative_url, query))

    def build_url(self, relative_url: str, query: str = "") -> str:
        return f"{self.config.base_url}{relative_url}{query}"

    def default_headers(self) -> dict[str, str]:
        headers = {"Accept": self.config.accept}
        if self.config.client_id:
            headers[CLIENT_ID_HEADER] = self.config.client_id
        return headers

    def close(self) -> None:
        if self._owned_client is not None:
            self._owned_client.close()

    def __enter__(self) -> TwitchHttpClient:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _get_content_from_url(self, url: str) -> str:
        self._logger.debug("twitch_request", url=url)
        try:
            response = self._http_get(url, headers=self.default_headers())
        except httpx.RequestError as exc:
            self._logger.error("twitch_transport_error", url=url, error=str(exc))
            raise wrap_transport_error(exc) from exc

        try:
            return classify_response(response, url)
        except TwitchUnauthorizedError:
            self._logger.warning("twitch_unauthorized", url=url)
            raise
        except TwitchServerError as exc:
            self._logger.error(
                "twitch_server_error",
                url=url,
                status_code=exc.status_code,
                body=exc.body.strip() if exc.body else None,
            )
            raise


__all__ = [
    "ACCEPT_MEDIA_TYPE",
    "CLIENT_ID_HEADER",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "TwitchClientConfig",
    "TwitchHttpClient",
    "classify_response",
    "wrap_transport_error",
]
