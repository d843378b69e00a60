"""Twitch API のレスポンス例を提供する共有フィクスチャ。"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

BASE = "https://api.twitch.tv/kraken"

_IMAGE = {
    "large": "http://static-cdn.jtvnw.net/ttv-boxart/Counter-Strike:%20Global%20Offensive-272x380.jpg",
    "medium": "http://static-cdn.jtvnw.net/ttv-boxart/Counter-Strike:%20Global%20Offensive-136x190.jpg",
    "small": "http://static-cdn.jtvnw.net/ttv-boxart/Counter-Strike:%20Global%20Offensive-52x72.jpg",
    "template": "http://static-cdn.jtvnw.net/ttv-boxart/Counter-Strike:%20Global%20Offensive-{width}x{height}.jpg",
}

_CHANNEL = {
    "mature": False,
    "status": "test status",
    "broadcaster_language": "en",
    "display_name": "test_channel",
    "game": "Gaming Talk Shows",
    "delay": None,
    "language": "en",
    "_id": 12345,
    "name": "test_channel",
    "created_at": "2007-05-22T10:39:54Z",
    "updated_at": "2015-02-12T04:15:49Z",
    "logo": "http://static-cdn.jtvnw.net/jtv_user_pictures/test_channel-profile_image-300x300.jpeg",
    "banner": None,
    "video_banner": None,
    "background": None,
    "profile_banner": None,
    "profile_banner_background_color": "null",
    "partner": True,
    "url": "http://www.twitch.tv/test_channel",
    "views": 49144894,
    "followers": 215780,
    "_links": {
        relation: f"{BASE}/channels/test_channel/{relation}"
        for relation in (
            "follows",
            "commercial",
            "stream_key",
            "features",
            "subscriptions",
            "editors",
            "teams",
            "videos",
        )
    }
    | {
        "self": f"{BASE}/channels/test_channel",
        "chat": f"{BASE}/chat/test_channel",
    },
}

_STREAM = {
    "game": "StarCraft II: Heart of the Swarm",
    "viewers": 2123,
    "average_fps": 29.9880749574,
    "delay": 0,
    "video_height": 720,
    "is_playlist": False,
    "created_at": "2015-02-12T04:42:31Z",
    "_id": 4989654544,
    "channel": _CHANNEL,
    "preview": _IMAGE,
    "_links": {"self": f"{BASE}/streams/test_channel"},
}


@pytest.fixture()
def channel_payload() -> dict[str, Any]:
    return copy.deepcopy(_CHANNEL)


@pytest.fixture()
def stream_payload() -> dict[str, Any]:
    return copy.deepcopy(_STREAM)


@pytest.fixture()
def top_games_payload() -> dict[str, Any]:
    return {
        "_links": {
            "self": f"{BASE}/games/top?limit=2&offset=0",
            "next": f"{BASE}/games/top?limit=2&offset=2",
        },
        "_total": 322,
        "top": [
            {
                "viewers": 23873,
                "channels": 305,
                "game": {
                    "name": "Counter-Strike: Global Offensive",
                    "box": _IMAGE,
                    "logo": _IMAGE,
                    "_links": {},
                    "_id": 32399,
                    "giantbomb_id": 36113,
                },
            },
            {
                "viewers": 1200,
                "channels": 40,
                "game": {
                    "name": "Dota 2",
                    "box": _IMAGE,
                    "logo": _IMAGE,
                    "_links": {},
                    "_id": 29595,
                    "giantbomb_id": 32887,
                },
            },
        ],
    }


@pytest.fixture()
def streams_payload() -> dict[str, Any]:
    query = "channel=test_channel%2Ctest_channel2&game=StarCraft+II%3A+Heart+of+the+Swarm"
    return {
        "_total": 12345,
        "streams": [copy.deepcopy(_STREAM)],
        "_links": {
            "summary": f"{BASE}/streams/summary",
            "followed": f"{BASE}/streams/followed",
            "next": f"{BASE}/streams?{query}&limit=100&offset=100",
            "featured": f"{BASE}/streams/featured",
            "self": f"{BASE}/streams?{query}&limit=100&offset=0",
        },
    }


@pytest.fixture()
def featured_payload() -> dict[str, Any]:
    return {
        "_links": {
            "self": f"{BASE}/streams/featured?limit=25&offset=0",
            "next": f"{BASE}/streams/featured?limit=25&offset=25",
        },
        "featured": [
            {
                "image": "http://s.jtvnw.net/jtv_user_pictures/hosted_images/TwitchPartnerSpotlight.png",
                "text": "<p>some html to describe this featured stream</p>",
                "title": "Twitch Partner Spotlight",
                "sponsored": False,
                "priority": 3,
                "scheduled": True,
                "stream": copy.deepcopy(_STREAM),
            }
        ],
    }


@pytest.fixture()
def basic_info_payload() -> dict[str, Any]:
    return {
        "token": {"valid": False, "user_name": None, "authorization": None},
        "_links": {
            "channel": f"{BASE}/channel",
            "user": f"{BASE}/user",
            "streams": f"{BASE}/streams",
            "ingests": f"{BASE}/ingests",
            "teams": f"{BASE}/teams",
            "search": f"{BASE}/search",
        },
    }


@pytest.fixture()
def ingests_payload() -> dict[str, Any]:
    return {
        "_links": {"self": f"{BASE}/ingests"},
        "ingests": [
            {
                "name": "EU: Amsterdam, NL",
                "default": False,
                "_id": 24,
                "url_template": "rtmp://live-ams.twitch.tv/app/{stream_key}",
                "availability": 1.0,
            }
        ],
    }


@pytest.fixture()
def json_response() -> Callable[..., httpx.Response]:
    """JSON 本文を持つ httpx.Response を生成する。"""

    def factory(payload: Any, status: int = 200, url: str = f"{BASE}/") -> httpx.Response:
        return httpx.Response(
            status,
            content=json.dumps(payload).encode("utf-8"),
            request=httpx.Request("GET", url),
        )

    return factory
