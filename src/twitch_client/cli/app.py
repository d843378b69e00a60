from __future__ import annotations

import typer

from twitch_client.cli.commands import api, channels, games, streams
from twitch_client.shared.config import get_settings
from twitch_client.shared.exceptions import ConfigurationError
from twitch_client.shared.logging import configure_logging

app = typer.Typer(help="Twitch API (v3) 読み取り専用クライアントの CLI")

app.add_typer(games.app, name="games", help="ゲーム関連の操作")
app.add_typer(streams.app, name="streams", help="ストリーム関連の操作")
app.add_typer(channels.app, name="channels", help="チャンネル関連の操作")
app.add_typer(api.app, name="api", help="API ルート・配信サーバー関連の操作")


def main() -> None:
    """エントリポイント。"""

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        typer.echo(f"設定の読み込みに失敗しました: {exc}", err=True)
        raise SystemExit(1) from exc
    configure_logging(settings.log_level, json_output=settings.log_json)
    app()


if __name__ == "__main__":  # pragma: no cover - CLI エントリ
    main()
