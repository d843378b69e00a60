"""Twitch クライアントの例外体系。

呼び出し側は `TwitchClientError` を捕捉し、`kind` もしくは例外クラスで方針を決める
(例: `UNAUTHORIZED` なら再認証、`UPSTREAM_SERVER_ERROR` なら時間をおいて再実行)。
ドキュメントにないステータスコードは `UnhandledResponseError` (AssertionError) であり、
この体系には含めない。
"""

from __future__ import annotations

from enum import Enum

import httpx

from twitch_client.shared.exceptions import BaseAppError, ContractViolationError


class TwitchErrorKind(str, Enum):
    """Twitch クライアントが返すエラー種別。"""

    TRANSPORT = "transport"
    PROTOCOL_NEGOTIATION = "protocol_negotiation"
    UNAUTHORIZED = "unauthorized"
    UPSTREAM_SERVER_ERROR = "upstream_server_error"
    DESERIALIZATION = "deserialization"


class TwitchClientError(BaseAppError):
    """Twitch クライアント共通の例外。"""

    kind: TwitchErrorKind
    default_message = "Twitch API request failed"


class TwitchTransportError(TwitchClientError):
    """サーバーへ到達できなかった (接続・読み込み・タイムアウトなど)。"""

    kind = TwitchErrorKind.TRANSPORT
    default_message = "Failed to communicate with the Twitch API"


class TwitchTLSError(TwitchClientError):
    """TLS ハンドシェイクに失敗した。"""

    kind = TwitchErrorKind.PROTOCOL_NEGOTIATION
    default_message = "TLS negotiation with the Twitch API failed"


class TwitchUnauthorizedError(TwitchClientError):
    """認証が必要なリソースへ未認証でアクセスした (HTTP 401)。"""

    kind = TwitchErrorKind.UNAUTHORIZED

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Tried to access a secured resource prior to authentication: {url}")


class TwitchServerError(TwitchClientError):
    """Twitch 側のサーバーエラー (HTTP 5xx)。"""

    kind = TwitchErrorKind.UPSTREAM_SERVER_ERROR

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.status_code = response.status_code
        self.url = str(response.request.url) if _has_request(response) else None
        self.body = response.text
        super().__init__(f"Twitch server error (status={self.status_code})")


class TwitchDeserializationError(TwitchClientError):
    """レスポンス本文が期待する JSON 形状ではなかった。"""

    kind = TwitchErrorKind.DESERIALIZATION
    default_message = "Failed to deserialize the Twitch API response"


class UnhandledResponseError(ContractViolationError):
    """ドキュメントにないステータスコードを受け取った。"""

    def __init__(self, response: httpx.Response, url: str) -> None:
        self.response = response
        self.status_code = response.status_code
        self.url = url
        super().__init__(
            f"Unhandled response status {response.status_code} "
            f"({response.reason_phrase or '-'}) for {url}"
        )


def _has_request(response: httpx.Response) -> bool:
    try:
        response.request  # noqa: B018 - request 未設定時は RuntimeError
    except RuntimeError:
        return False
    return True


__all__ = [
    "TwitchClientError",
    "TwitchDeserializationError",
    "TwitchErrorKind",
    "TwitchServerError",
    "TwitchTLSError",
    "TwitchTransportError",
    "TwitchUnauthorizedError",
    "UnhandledResponseError",
]
