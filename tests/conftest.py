from typing import Any, Callable, Optional

import pytest


def make_track_payload(
    track_id: str = "track-a",
    name: str = "One More Time",
    artist: str = "Daft Punk",
    album: str = "Discovery",
    duration_ms: int = 320_357,
    image_count: int = 3,
) -> dict[str, Any]:
    return {
        "id": track_id,
        "name": name,
        "duration_ms": duration_ms,
        "explicit": False,
        "popularity": 80,
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        "artists": [
            {
                "name": artist,
                "external_urls": {"spotify": "https://open.spotify.com/artist/daft"},
            }
        ],
        "album": {
            "name": album,
            "external_urls": {"spotify": "https://open.spotify.com/album/disc"},
            "images": [
                {"url": f"https://i.scdn.co/image/{size}", "height": size, "width": size}
                for size in (640, 300, 64)[:image_count]
            ],
        },
    }


def make_search_payload(
    items: Optional[list[dict[str, Any]]] = None,
    total: Optional[int] = None,
    next_url: Optional[str] = None,
    previous_url: Optional[str] = None,
) -> dict[str, Any]:
    tracks = items if items is not None else [make_track_payload()]
    return {
        "tracks": {
            "href": "https://api.spotify.com/v1/search?query=x&type=track&offset=0&limit=5",
            "items": tracks,
            "total": total if total is not None else len(tracks),
            "next": next_url,
            "previous": previous_url,
        }
    }


@pytest.fixture
def track_payload() -> Callable[..., dict[str, Any]]:
    return make_track_payload


@pytest.fixture
def search_payload() -> Callable[..., dict[str, Any]]:
    return make_search_payload
