from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated

import typer
from rich.table import Table

from twitch_client.core.paging import MAX_LIMIT, MIN_LIMIT, Paging
from twitch_client.infra.twitch import GameInfo, TopGamesParams, build_twitch_client
from twitch_client.shared.logging import get_logger

from .common import OutputFormat, console, echo_json, format_optional, handle_twitch_errors

app = typer.Typer(help="ゲーム関連のコマンド")


def _render_table(items: Iterable[GameInfo], *, total: int) -> None:
    table = Table(title=f"Top Games (total: {total})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Game", style="bold")
    table.add_column("Viewers", justify="right")
    table.add_column("Channels", justify="right")
    table.add_column("GiantBomb")

    for item in items:
        table.add_row(
            str(item.game.id),
            item.game.name,
            str(item.viewers),
            str(item.channels),
            format_optional(item.game.giantbomb_id),
        )

    console().print(table)


@app.command()
def top(
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=MIN_LIMIT, max=MAX_LIMIT, help="1 ページの件数"),
    ] = None,
    offset: Annotated[int, typer.Option("--offset", "-o", min=0, help="取得開始位置")] = 0,
    pages: Annotated[
        int, typer.Option("--pages", "-p", min=1, help="next リンクを辿って取得するページ数")
    ] = 1,
    output: Annotated[
        OutputFormat,
        typer.Option("--output", "-f", case_sensitive=False, help="出力形式(table/json)"),
    ] = OutputFormat.TABLE,
) -> None:
    """視聴者数の多い順にゲームを表示する。"""

    logger = get_logger("twitch_client.cli.games.top")
    params = TopGamesParams()
    if limit is not None:
        params = params.with_paging(Paging.of(offset, limit))
    elif offset:
        params = TopGamesParams(offset=offset)

    items: list[GameInfo] = []
    total = 0
    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        for page in range(pages):
            response = client.top_games(params)
            items.extend(response.top)
            total = response.total
            if page + 1 < pages:
                params = params.with_paging(response.next_paging())

    logger.info("トップゲーム取得完了", results=len(items), pages=pages)

    if output is OutputFormat.JSON:
        echo_json(items)
    else:
        _render_table(items, total=total)
