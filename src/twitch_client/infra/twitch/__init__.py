"""Twitch API 向け infra 層パッケージ。"""

from .client import (
    TwitchClient,
    TwitchClientBuilder,
    TwitchClientProtocol,
    build_twitch_client,
)
from .dto import (
    Authorization,
    BasicInfo,
    Channel,
    ChannelStream,
    FeaturedStream,
    FeaturedStreams,
    Game,
    GameInfo,
    ImageLinks,
    Ingest,
    Ingests,
    Stream,
    Streams,
    StreamsSummary,
    Token,
    TopGames,
)
from .errors import (
    TwitchClientError,
    TwitchDeserializationError,
    TwitchErrorKind,
    TwitchServerError,
    TwitchTLSError,
    TwitchTransportError,
    TwitchUnauthorizedError,
    UnhandledResponseError,
)
from .http import (
    ACCEPT_MEDIA_TYPE,
    CLIENT_ID_HEADER,
    DEFAULT_BASE_URL,
    TwitchClientConfig,
    TwitchHttpClient,
    classify_response,
)
from .params import (
    FeaturedStreamsParams,
    FeaturedStreamsParamsBuilder,
    StreamsParams,
    StreamsParamsBuilder,
    StreamsSummaryParams,
    StreamsSummaryParamsBuilder,
    StreamType,
    TopGamesParams,
    TopGamesParamsBuilder,
)

__all__ = [
    "ACCEPT_MEDIA_TYPE",
    "CLIENT_ID_HEADER",
    "DEFAULT_BASE_URL",
    "Authorization",
    "BasicInfo",
    "Channel",
    "ChannelStream",
    "FeaturedStream",
    "FeaturedStreams",
    "FeaturedStreamsParams",
    "FeaturedStreamsParamsBuilder",
    "Game",
    "GameInfo",
    "ImageLinks",
    "Ingest",
    "Ingests",
    "Stream",
    "StreamType",
    "Streams",
    "StreamsParams",
    "StreamsParamsBuilder",
    "StreamsSummary",
    "StreamsSummaryParams",
    "StreamsSummaryParamsBuilder",
    "Token",
    "TopGames",
    "TopGamesParams",
    "TopGamesParamsBuilder",
    "TwitchClient",
    "TwitchClientBuilder",
    "TwitchClientConfig",
    "TwitchClientError",
    "TwitchClientProtocol",
    "TwitchDeserializationError",
    "TwitchErrorKind",
    "TwitchHttpClient",
    "TwitchServerError",
    "TwitchTLSError",
    "TwitchTransportError",
    "TwitchUnauthorizedError",
    "UnhandledResponseError",
    "build_twitch_client",
    "classify_response",
]
