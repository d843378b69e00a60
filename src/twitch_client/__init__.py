"""Twitch REST API (v3) の読み取り専用クライアント。"""

from twitch_client.core import Links, Paging, PagingOutOfRangeError
from twitch_client.infra.twitch import (
    FeaturedStreamsParams,
    StreamsParams,
    StreamsSummaryParams,
    StreamType,
    TopGamesParams,
    TwitchClient,
    TwitchClientBuilder,
    TwitchClientError,
    TwitchErrorKind,
    build_twitch_client,
)
from twitch_client.shared import ContractViolationError

__all__ = [
    "ContractViolationError",
    "FeaturedStreamsParams",
    "Links",
    "Paging",
    "PagingOutOfRangeError",
    "StreamType",
    "StreamsParams",
    "StreamsSummaryParams",
    "TopGamesParams",
    "TwitchClient",
    "TwitchClientBuilder",
    "TwitchClientError",
    "TwitchErrorKind",
    "build_twitch_client",
]
