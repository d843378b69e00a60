"""ページングカーソルの生成と復元を検証する。"""

from __future__ import annotations

import pytest

from twitch_client.core.links import Links, MissingLinkError
from twitch_client.core.paging import (
    MAX_LIMIT,
    Paging,
    PagingLinkError,
    PagingOutOfRangeError,
    next_paging_from_links,
    paging_from_links,
)
from twitch_client.core.query import encode_query


def test_default_paging_emits_no_query() -> None:
    paging = Paging.default()

    assert paging.is_default
    assert paging.to_query_pairs() == ()
    assert encode_query(paging.to_query_pairs()) == ""


def test_explicit_paging_emits_offset_then_limit() -> None:
    paging = Paging.of(0, 2)

    assert not paging.is_default
    assert encode_query(paging.to_query_pairs()) == "?offset=0&limit=2"


@pytest.mark.parametrize("limit", [0, MAX_LIMIT + 1, -1])
def test_limit_out_of_range_is_rejected(limit: int) -> None:
    with pytest.raises(PagingOutOfRangeError):
        Paging.of(0, limit)


def test_limit_bounds_are_inclusive() -> None:
    assert Paging.of(0, 1).limit == 1
    assert Paging.of(0, MAX_LIMIT).limit == MAX_LIMIT


def test_negative_offset_and_half_specified_paging_are_rejected() -> None:
    with pytest.raises(PagingOutOfRangeError):
        Paging.of(-1, 10)
    with pytest.raises(PagingOutOfRangeError):
        Paging(offset=0)
    with pytest.raises(ValueError):
        Paging(limit=10)


def test_next_page_advances_by_limit() -> None:
    assert Paging.of(10, 25).next_page() == Paging.of(35, 25)

    with pytest.raises(PagingOutOfRangeError):
        Paging.default().next_page()


def test_from_url_reads_offset_and_limit() -> None:
    paging = Paging.from_url("https://api.twitch.tv/kraken/games/top?limit=2&offset=4")

    assert paging == Paging.of(4, 2)


def test_from_url_defaults_offset_to_zero() -> None:
    assert Paging.from_url("https://api.twitch.tv/kraken/streams?limit=10") == Paging.of(0, 10)


def test_from_url_without_limit_is_not_paged() -> None:
    assert Paging.from_url("https://api.twitch.tv/kraken/streams?offset=10") is None
    assert Paging.from_url("https://api.twitch.tv/kraken/streams") is None


def test_from_url_rejects_out_of_range_limit() -> None:
    with pytest.raises(PagingOutOfRangeError):
        Paging.from_url("https://api.twitch.tv/kraken/streams?offset=0&limit=500")


@pytest.mark.parametrize("query", ["offset=0&limit=500", "offset=0&limit=0", "offset=-5&limit=10"])
def test_paging_from_links_names_bounds_violation(query: str) -> None:
    links = Links({"self": f"https://api.twitch.tv/kraken/streams?{query}"})

    with pytest.raises(PagingLinkError, match="out of range"):
        paging_from_links(links)


def test_paging_from_links_uses_self_and_next() -> None:
    links = Links(
        {
            "self": "https://api.twitch.tv/kraken/games/top?limit=2&offset=0",
            "next": "https://api.twitch.tv/kraken/games/top?limit=2&offset=2",
        }
    )

    assert paging_from_links(links) == Paging.of(0, 2)
    assert next_paging_from_links(links) == Paging.of(2, 2)


def test_paging_from_links_requires_link() -> None:
    with pytest.raises(MissingLinkError):
        next_paging_from_links(Links({"self": "https://api.twitch.tv/kraken/games/top?limit=2"}))


def test_paging_from_links_rejects_unpaged_link() -> None:
    links = Links({"self": "https://api.twitch.tv/kraken/streams/summary"})

    with pytest.raises(PagingLinkError) as exc_info:
        paging_from_links(links)

    assert exc_info.value.link == "https://api.twitch.tv/kraken/streams/summary"
    assert isinstance(exc_info.value, AssertionError)


def test_paging_from_links_rejects_malformed_url() -> None:
    links = Links({"self": "https://api.twitch.tv:notaport/games/top?limit=2"})

    with pytest.raises(PagingLinkError):
        paging_from_links(links)
