import pytest

from song_recommender.errors import MalformedLinkError
from song_recommender.services import SharedLink, find_shared_link, parse_shared_link


def test_parse_shared_link_strips_chat_markup() -> None:
    link = parse_shared_link("<https://open.catalog.com/track/abc123>")

    assert link == SharedLink(domain="open.catalog.com", id_type="track", id="abc123")


@pytest.mark.parametrize(
    "raw, expected_id",
    [
        ("https://open.spotify.com/track/abc123?si=share-token", "abc123"),
        ("http://open.spotify.com/track/abc123#top", "abc123"),
        ("<https://open.spotify.com/track/abc123|open.spotify.com/track/abc123>", "abc123"),
        ("https://open.spotify.com/intl-de/track/abc123", "abc123"),
    ],
)
def test_parse_shared_link_drops_suffixes(raw: str, expected_id: str) -> None:
    link = parse_shared_link(raw)

    assert link.domain == "open.spotify.com"
    assert link.id_type == "track"
    assert link.id == expected_id


def test_catalog_path_rebuilds_web_api_resource() -> None:
    link = parse_shared_link("https://open.spotify.com/album/xyz789")

    assert link.catalog_path == "albums/xyz789"


@pytest.mark.parametrize(
    "raw",
    [
        "https://open.spotify.com/track",
        "<https://open.spotify.com>",
        "open.spotify.com//abc",
        "https://open.spotify.com/track/?si=1",
        "",
    ],
)
def test_parse_shared_link_rejects_malformed_links(raw: str) -> None:
    with pytest.raises(MalformedLinkError):
        parse_shared_link(raw)


def test_find_shared_link_locates_link_inside_message() -> None:
    text = "you have to hear this <https://open.spotify.com/track/abc123?si=x> so good"

    assert find_shared_link(text) == "https://open.spotify.com/track/abc123?si=x"


@pytest.mark.parametrize("text", [None, "", "no links here", "https://example.com/track/1"])
def test_find_shared_link_returns_none_without_catalog_link(text: str | None) -> None:
    assert find_shared_link(text) is None
