"""CLI テスト用のフィクスチャ。

`build_twitch_client` を差し替え、登録済みの URL にだけ応答する実クライアントを返す。
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from typer.testing import CliRunner

from twitch_client.infra.twitch import TwitchClient, TwitchClientConfig, TwitchHttpClient


class RoutingGet:
    def __init__(self, routes: dict[str, httpx.Response]) -> None:
        self.routes = routes
        self.urls: list[str] = []

    def __call__(self, url: str, *, headers: dict[str, str]) -> httpx.Response:
        self.urls.append(url)
        if url not in self.routes:
            msg = f"unexpected url: {url}"
            raise AssertionError(msg)
        return self.routes[url]


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def install_routes(monkeypatch: pytest.MonkeyPatch) -> Callable[..., RoutingGet]:
    def install(module: str, routes: dict[str, httpx.Response]) -> RoutingGet:
        stub = RoutingGet(routes)

        def factory(**_kwargs: object) -> TwitchClient:
            http_client = TwitchHttpClient(TwitchClientConfig(), http_get=stub)
            return TwitchClient(http_client=http_client)

        monkeypatch.setattr(f"twitch_client.cli.commands.{module}.build_twitch_client", factory)
        return stub

    return install
