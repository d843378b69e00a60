"""共通例外。"""

from __future__ import annotations


class BaseAppError(Exception):
    """全レイヤで共有するベース例外。"""

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ConfigurationError(BaseAppError):
    """設定読み込みや不足を示すエラー。"""

    default_message = "Configuration is invalid or missing"


class DomainError(BaseAppError):
    """ドメイン層で利用する基底例外。"""

    default_message = "Domain layer error"


class ContractViolationError(AssertionError):
    """Twitch API の契約違反 (ドキュメントにない応答形状) を示す致命的エラー。

    `BaseAppError` を継承しないため、`except BaseAppError` では捕捉されない。
    開発中に API 仕様の変化へ気付くためのもので、呼び出し側での回復は想定しない。
    """

    default_message = "Twitch API contract violation"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


__all__ = [
    "BaseAppError",
    "ConfigurationError",
    "ContractViolationError",
    "DomainError",
]
