"""CLI コマンド間で共有する出力とエラー処理。"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Any

import typer
from rich.console import Console
from structlog.stdlib import BoundLogger

from twitch_client.infra.twitch import TwitchClientError, TwitchUnauthorizedError
from twitch_client.shared.types import dto_dict


class OutputFormat(str, Enum):
    """出力形式。"""

    TABLE = "table"
    JSON = "json"


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Enum):
        return value.value
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def echo_json(payload: Any) -> None:
    """DTO (または DTO のリスト) を JSON として出力する。"""

    if isinstance(payload, (list, tuple)):
        data: Any = [dto_dict(item) for item in payload]
    else:
        data = dto_dict(payload)
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2, default=_json_default))


def console() -> Console:
    return Console(force_terminal=False, color_system=None)


def format_optional(value: object | None) -> str:
    return "-" if value is None or value == "" else str(value)


@contextmanager
def handle_twitch_errors(logger: BoundLogger) -> Iterator[None]:
    """Twitch クライアントの例外を終了コード付きの CLI エラーへ変換する。"""

    try:
        yield
    except TwitchUnauthorizedError as exc:
        logger.warning("Twitch API 認証エラー", url=exc.url)
        typer.echo(f"認証が必要なリソースです: {exc.url}")
        raise typer.Exit(code=2) from exc
    except TwitchClientError as exc:
        logger.error("Twitch API リクエストに失敗", error_type=type(exc).__name__, error=str(exc))
        typer.echo(f"Twitch API の呼び出しに失敗しました: {exc}")
        raise typer.Exit(code=1) from exc
