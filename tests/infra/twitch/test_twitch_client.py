"""TwitchClient の各エンドポイント呼び出しを検証する。"""

from __future__ import annotations

import httpx
import pytest
import structlog

from twitch_client.core.paging import Paging
from twitch_client.infra.twitch import (
    StreamsParamsBuilder,
    StreamsSummaryParams,
    StreamType,
    TopGamesParams,
    TwitchClient,
    TwitchClientBuilder,
    TwitchClientConfig,
    TwitchDeserializationError,
    TwitchHttpClient,
    TwitchServerError,
    TwitchUnauthorizedError,
    build_twitch_client,
)
from twitch_client.shared.config import AppSettings, TwitchSettings

BASE = "https://api.twitch.tv/kraken"


class RoutingGet:
    """URL ごとに登録した応答を返す http_get スタブ。"""

    def __init__(self, routes: dict[str, httpx.Response]) -> None:
        self._routes = routes
        self.urls: list[str] = []

    def __call__(self, url: str, *, headers: dict[str, str]) -> httpx.Response:
        self.urls.append(url)
        if url not in self._routes:
            msg = f"unexpected url: {url}"
            raise AssertionError(msg)
        return self._routes[url]


def _client(routes: dict[str, httpx.Response]) -> tuple[TwitchClient, RoutingGet]:
    stub = RoutingGet(routes)
    http_client = TwitchHttpClient(TwitchClientConfig(client_id="cid"), http_get=stub)
    return TwitchClient(http_client=http_client), stub


def test_top_games_requests_paged_url(top_games_payload, json_response) -> None:
    url = f"{BASE}/games/top?offset=0&limit=2"
    client, stub = _client({url: json_response(top_games_payload, url=url)})

    top_games = client.top_games(TopGamesParams(offset=0, limit=2))

    assert stub.urls == [url]
    assert top_games.total == 322


def test_top_games_follows_next_paging(top_games_payload, json_response) -> None:
    first_url = f"{BASE}/games/top?offset=0&limit=2"
    second_url = f"{BASE}/games/top?offset=2&limit=2"
    client, stub = _client(
        {
            first_url: json_response(top_games_payload, url=first_url),
            second_url: json_response(top_games_payload, url=second_url),
        }
    )

    first = client.top_games(TopGamesParams().with_paging(Paging.of(0, 2)))
    client.top_games(TopGamesParams().with_paging(first.next_paging()))

    assert stub.urls == [first_url, second_url]


def test_default_params_request_bare_path(streams_payload, json_response) -> None:
    url = f"{BASE}/streams"
    client, stub = _client({url: json_response(streams_payload, url=url)})

    client.streams()

    assert stub.urls == [url]


def test_streams_with_filters(streams_payload, json_response) -> None:
    url = f"{BASE}/streams?game=Dota%202&channel=foo%2Cbar&stream_type=live"
    client, stub = _client({url: json_response(streams_payload, url=url)})
    params = (
        StreamsParamsBuilder()
        .game("Dota 2")
        .channels(["foo", "bar"])
        .stream_type(StreamType.LIVE)
        .build()
    )

    streams = client.streams(params)

    assert stub.urls == [url]
    assert streams.streams[0].channel.name == "test_channel"


def test_stream_for_channel_quotes_path(stream_payload, json_response) -> None:
    url = f"{BASE}/streams/some%20channel"
    payload = {"stream": stream_payload, "_links": {"self": url, "channel": f"{BASE}/channels/x"}}
    client, _ = _client({url: json_response(payload, url=url)})

    channel_stream = client.stream("some channel")

    assert channel_stream.is_live


def test_stream_rejects_empty_channel() -> None:
    client, _ = _client({})

    with pytest.raises(ValueError):
        client.stream("")


def test_featured_summary_channel_and_root(
    featured_payload, channel_payload, basic_info_payload, ingests_payload, json_response
) -> None:
    summary = {"viewers": 10, "channels": 2, "_links": {"self": f"{BASE}/streams/summary"}}
    routes = {
        f"{BASE}/streams/featured": json_response(featured_payload),
        f"{BASE}/streams/summary?game=Dota%202": json_response(summary),
        f"{BASE}/channels/test_channel": json_response(channel_payload),
        f"{BASE}/": json_response(basic_info_payload),
        f"{BASE}/ingests": json_response(ingests_payload),
    }
    client, stub = _client(routes)

    assert client.featured_streams().featured[0].priority == 3
    assert client.streams_summary(StreamsSummaryParams(game="Dota 2")).viewers == 10
    assert client.channel("test_channel").followers == 215780
    assert client.basic_info().token.valid is False
    assert client.ingests().ingests[0].name == "EU: Amsterdam, NL"
    assert stub.urls == list(routes)


def test_invalid_json_raises_deserialization_error() -> None:
    url = f"{BASE}/ingests"
    response = httpx.Response(200, content=b"<html>", request=httpx.Request("GET", url))
    client, _ = _client({url: response})

    with pytest.raises(TwitchDeserializationError):
        client.ingests()


def test_unauthorized_propagates(json_response) -> None:
    url = f"{BASE}/channels/secret"
    client, _ = _client({url: json_response({"error": "Unauthorized"}, status=401, url=url)})

    with pytest.raises(TwitchUnauthorizedError):
        client.channel("secret")


def test_builder_configures_http_client() -> None:
    client = (
        TwitchClientBuilder()
        .client_id("cid")
        .base_url("https://example.com/kraken")
        .timeout(5)
        .verify_tls(False)
        .build()
    )

    with client:
        assert client.config.client_id == "cid"
        assert client.config.base_url == "https://example.com/kraken"
        assert client.config.timeout == 5
        assert client.config.verify_tls is False


def test_builder_uses_given_httpx_client(top_games_payload, json_response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Client-ID"] == "cid"
        assert request.headers["Accept"] == "application/vnd.twitchtv.v3+json"
        return json_response(top_games_payload, url=str(request.url))

    http = httpx.Client(transport=httpx.MockTransport(handler))
    client = TwitchClientBuilder().client_id("cid").http_client(http).build()

    assert client.top_games().total == 322
    http.close()


def test_build_twitch_client_from_settings() -> None:
    settings = AppSettings(twitch=TwitchSettings(client_id="cid", timeout_seconds=3))

    with build_twitch_client(settings=settings) as client:
        assert client.config.client_id == "cid"
        assert client.config.timeout == 3
        assert client.config.base_url == BASE


def test_library_use_keeps_stdout_clean(capsys, top_games_payload, json_response) -> None:
    """configure_logging を呼ばない利用者の stdout には何も出力しない。"""

    structlog.reset_defaults()
    ok_url = f"{BASE}/games/top"
    failing_url = f"{BASE}/streams"
    client, _ = _client(
        {
            ok_url: json_response(top_games_payload, url=ok_url),
            failing_url: json_response({"error": "x"}, status=503, url=failing_url),
        }
    )

    client.top_games()
    with pytest.raises(TwitchServerError):
        client.streams()

    assert capsys.readouterr().out == ""


def test_numeric_overflow_raises_deserialization_error(streams_payload, json_response) -> None:
    streams_payload["streams"][0]["average_fps"] = 10**400
    url = f"{BASE}/streams"
    client, _ = _client({url: json_response(streams_payload, url=url)})

    with pytest.raises(TwitchDeserializationError):
        client.streams()


def test_builder_rejects_timeout_with_injected_client() -> None:
    http = httpx.Client()

    with pytest.raises(ValueError, match="timeout"):
        TwitchClientBuilder().timeout(5).http_client(http).build()
    with pytest.raises(ValueError, match="verify_tls"):
        TwitchClientBuilder().http_client(http).verify_tls(False).build()

    http.close()
