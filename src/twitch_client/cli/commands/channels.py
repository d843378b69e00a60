from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from twitch_client.infra.twitch import Channel, build_twitch_client
from twitch_client.shared.logging import get_logger

from .common import OutputFormat, console, echo_json, format_optional, handle_twitch_errors

app = typer.Typer(help="チャンネル関連のコマンド")


def _render_table(channel: Channel) -> None:
    table = Table(title=f"Channel: {channel.display_name}", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    rows = (
        ("ID", str(channel.id)),
        ("Name", channel.name),
        ("Status", format_optional(channel.status)),
        ("Game", format_optional(channel.game)),
        ("Language", channel.language),
        ("Partner", "yes" if channel.partner else "no"),
        ("Views", str(channel.views)),
        ("Followers", str(channel.followers)),
        ("URL", channel.url),
        ("Created", channel.created_at.date().isoformat()),
    )
    for label, value in rows:
        table.add_row(label, value)

    console().print(table)


@app.command()
def get(
    name: Annotated[str, typer.Argument(help="チャンネル名")],
    output: Annotated[
        OutputFormat,
        typer.Option("--output", "-f", case_sensitive=False, help="出力形式(table/json)"),
    ] = OutputFormat.TABLE,
) -> None:
    """チャンネル情報を表示する。"""

    logger = get_logger("twitch_client.cli.channels.get", channel=name)

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        channel = client.channel(name)

    if output is OutputFormat.JSON:
        echo_json(channel)
    else:
        _render_table(channel)
