from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated

import typer
from rich.table import Table

from twitch_client.core.paging import MAX_LIMIT, MIN_LIMIT
from twitch_client.infra.twitch import (
    FeaturedStream,
    FeaturedStreamsParamsBuilder,
    Stream,
    StreamsParamsBuilder,
    StreamsSummaryParamsBuilder,
    StreamType,
    build_twitch_client,
)
from twitch_client.shared.logging import get_logger

from .common import OutputFormat, console, echo_json, format_optional, handle_twitch_errors

app = typer.Typer(help="ストリーム関連のコマンド")

LimitOption = Annotated[
    int | None,
    typer.Option("--limit", "-l", min=MIN_LIMIT, max=MAX_LIMIT, help="取得する件数"),
]
OffsetOption = Annotated[int | None, typer.Option("--offset", "-o", min=0, help="取得開始位置")]
OutputOption = Annotated[
    OutputFormat,
    typer.Option("--output", "-f", case_sensitive=False, help="出力形式(table/json)"),
]


def _stream_row(stream: Stream) -> tuple[str, ...]:
    return (
        stream.channel.display_name,
        format_optional(stream.game),
        str(stream.viewers),
        f"{stream.video_height}p",
        f"{stream.average_fps:.1f}",
        stream.created_at.isoformat(),
    )


def _render_streams(streams: Iterable[Stream], *, title: str) -> None:
    table = Table(title=title)
    table.add_column("Channel", style="bold")
    table.add_column("Game")
    table.add_column("Viewers", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("FPS", justify="right")
    table.add_column("Started")
    for stream in streams:
        table.add_row(*_stream_row(stream))
    console().print(table)


def _render_featured(items: Iterable[FeaturedStream]) -> None:
    table = Table(title="Featured Streams")
    table.add_column("Priority", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Channel")
    table.add_column("Viewers", justify="right")
    table.add_column("Sponsored")
    for item in items:
        table.add_row(
            str(item.priority),
            item.title,
            item.stream.channel.display_name,
            str(item.stream.viewers),
            "yes" if item.sponsored else "no",
        )
    console().print(table)


@app.command("list")
def list_streams(  # noqa: PLR0913 - CLI のため引数が多い
    game: Annotated[str | None, typer.Option("--game", "-g", help="ゲーム名で絞り込む")] = None,
    channels: Annotated[
        list[str] | None,
        typer.Option("--channel", "-c", help="チャンネル名 (複数指定可)"),
    ] = None,
    stream_type: Annotated[
        StreamType | None,
        typer.Option("--type", "-t", case_sensitive=False, help="all/playlist/live"),
    ] = None,
    app_client_id: Annotated[
        str | None,
        typer.Option("--app-client-id", help="指定アプリケーションからの配信のみ"),
    ] = None,
    limit: LimitOption = None,
    offset: OffsetOption = None,
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """視聴者数の多い順にストリームを表示する。"""

    logger = get_logger("twitch_client.cli.streams.list", game=game)
    builder = StreamsParamsBuilder().channels(channels or ())
    if game:
        builder.game(game)
    if stream_type is not None:
        builder.stream_type(stream_type)
    if app_client_id:
        builder.client_id(app_client_id)
    if limit is not None:
        builder.limit(limit)
    if offset is not None:
        builder.offset(offset)

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        response = client.streams(builder.build())

    logger.info("ストリーム取得完了", results=len(response.streams), total=response.total)

    if output is OutputFormat.JSON:
        echo_json(list(response.streams))
    else:
        _render_streams(response.streams, title=f"Streams (total: {response.total})")


@app.command()
def featured(
    limit: LimitOption = None,
    offset: OffsetOption = None,
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """おすすめ (プロモーション中) のストリームを表示する。"""

    logger = get_logger("twitch_client.cli.streams.featured")
    builder = FeaturedStreamsParamsBuilder()
    if limit is not None:
        builder.limit(limit)
    if offset is not None:
        builder.offset(offset)

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        response = client.featured_streams(builder.build())

    if output is OutputFormat.JSON:
        echo_json(list(response.featured))
    else:
        _render_featured(response.featured)


@app.command()
def summary(
    game: Annotated[str | None, typer.Option("--game", "-g", help="ゲーム名で絞り込む")] = None,
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """配信中のチャンネル数と視聴者数の集計を表示する。"""

    logger = get_logger("twitch_client.cli.streams.summary", game=game)
    params = StreamsSummaryParamsBuilder().game(game or "").build()

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        response = client.streams_summary(params)

    if output is OutputFormat.JSON:
        echo_json(response)
        return
    typer.echo(f"game: {game or 'all'}")
    typer.echo(f"channels: {response.channels}")
    typer.echo(f"viewers: {response.viewers}")


@app.command()
def get(
    channel: Annotated[str, typer.Argument(help="チャンネル名")],
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """チャンネルのストリームを表示する。オフラインなら終了コード 3。"""

    logger = get_logger("twitch_client.cli.streams.get", channel=channel)

    with build_twitch_client(logger=logger) as client, handle_twitch_errors(logger):
        response = client.stream(channel)

    if response.stream is None:
        typer.echo(f"{channel} はオフラインです。")
        raise typer.Exit(code=3)

    if output is OutputFormat.JSON:
        echo_json(response.stream)
    else:
        _render_streams((response.stream,), title=f"Stream: {channel}")
