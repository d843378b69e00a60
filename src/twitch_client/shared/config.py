"""アプリケーション全体で共有する設定ローダー。"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

EnvName = Literal["local", "test", "staging", "production"]


class TwitchSettings(BaseModel):
    """Twitch API 接続設定。

    client_id は任意だが、未設定の場合は匿名アクセスとして厳しいレート制限を受ける。
    """

    client_id: str | None = Field(None, description="Twitch application client id")
    base_url: AnyHttpUrl = Field(
        "https://api.twitch.tv/kraken", description="Twitch API のベース URL"
    )
    timeout_seconds: float = Field(10.0, gt=0, description="1 リクエストあたりのタイムアウト秒数")
    verify_tls: bool = Field(True, description="TLS 証明書を検証するかどうか")


class AppSettings(BaseSettings):
    """共有設定。`.env` 読み込みと環境変数バリデーションを担う。"""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: EnvName = Field("local", description="実行環境識別子")
    log_level: str = Field("WARNING", description="ルートロガーのログレベル")
    log_json: bool = Field(False, description="ログを JSON で出力するかどうか")
    twitch: TwitchSettings = Field(default_factory=TwitchSettings)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """設定をロードし、再利用する。

    LRU キャッシュによりプロセス内での重複読み込みを防ぎ、
    `pytest` などから `get_settings.cache_clear()` を呼び出すことで再読込できる。
    """

    try:
        return AppSettings()
    except ValidationError as exc:  # pragma: no cover - ValidationError carries context
        raise ConfigurationError(str(exc)) from exc


__all__ = [
    "AppSettings",
    "EnvName",
    "TwitchSettings",
    "get_settings",
]
