from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from twitch_client.infra.twitch import build_twitch_client
from twitch_client.shared.logging import get_logger

from .common import OutputFormat, console, echo_json, handle_twitch_errors

app = typer.Typer(help="API ルート・配信サーバー関連のコマンド")

OutputOption = Annotated[
    OutputFormat,
    typer.Option("--output", "-f", case_sensitive=False, help="出力形式(table/json)"),
]


@app.command()
def info(output: OutputOption = OutputFormat.TABLE) -> None:
    """認証状態と API のリンク一覧を表示する。"""

    logger = get_logger("twitch_client.cli.api.info")

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        basic_info = client.basic_info()

    if output is OutputFormat.JSON:
        echo_json(basic_info)
        return

    token = basic_info.token
    typer.echo(f"token valid: {'yes' if token.valid else 'no'}")
    if token.user_name:
        typer.echo(f"user: {token.user_name}")
    if token.authorization is not None:
        typer.echo(f"scopes: {', '.join(token.authorization.scopes) or '-'}")

    table = Table(title="Links")
    table.add_column("Relation", style="cyan")
    table.add_column("URL")
    for relation, url in sorted(basic_info.links.items()):
        table.add_row(relation, url)
    console().print(table)


@app.command()
def ingests(output: OutputOption = OutputFormat.TABLE) -> None:
    """RTMP 配信受付サーバーの一覧を表示する。"""

    logger = get_logger("twitch_client.cli.api.ingests")

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        response = client.ingests()

    if output is OutputFormat.JSON:
        echo_json(list(response.ingests))
        return

    table = Table(title="Ingests")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Availability", justify="right")
    table.add_column("Default")
    table.add_column("URL Template")
    for ingest in response.ingests:
        table.add_row(
            str(ingest.id),
            ingest.name,
            f"{ingest.availability:.1f}",
            "yes" if ingest.default else "no",
            ingest.url_template,
        )
    console().print(table)
