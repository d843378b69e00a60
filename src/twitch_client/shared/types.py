"""共有型・ユーティリティ。"""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from datetime import datetime
from typing import Any

# 画像やページなどのハイパーリンク文字列
UrlString = str
# ISO 639-1 の 2 文字ロケール (例: "en")
LocaleString = str


@dataclass(slots=True)
class ValueObject:
    """DTO や VO のベースクラス。"""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class DTO(ValueObject):
    """データ転送オブジェクト用ベース。"""


def dto_dict(instance: Any) -> dict[str, Any]:
    """DTO/VO、または任意の dataclass を dict 化する。"""

    if isinstance(instance, ValueObject):
        return instance.to_dict()
    if is_dataclass(instance) and not isinstance(instance, type):
        return asdict(instance)
    msg = "dto_dict expects a dataclass or ValueObject instance"
    raise TypeError(msg)


def parse_iso_datetime(value: str) -> datetime:
    """`2015-02-12T04:42:31Z` 形式の ISO 8601 文字列を aware datetime へ変換する。"""

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    return datetime.fromisoformat(normalized)


__all__ = [
    "DTO",
    "LocaleString",
    "UrlString",
    "ValueObject",
    "dto_dict",
    "parse_iso_datetime",
]
