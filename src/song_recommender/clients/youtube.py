"""Async client for video searches against the YouTube Data API."""

from __future__ import annotations

import html
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping, Optional, Sequence, cast

import httpx

from song_recommender.config.settings import AppSettings
from song_recommender.errors import UpstreamFetchError


class YouTubeClientConfigError(ValueError):
    """Raised when the YouTube API key is missing."""


class YouTubeAPIError(UpstreamFetchError):
    """Raised when a YouTube Data API request fails."""


@dataclass(slots=True, frozen=True)
class VideoCandidate:
    """Video returned by a YouTube search, exposing the fields used for matching."""

    video_id: str
    title: str
    description: str = ""

    @property
    def url(self) -> str:
        return f"https://youtu.be/{self.video_id}"


@dataclass(slots=True)
class YouTubeClient:
    """Minimal YouTube client used to find candidate videos for a track."""

    api_key: str
    base_url: str = "https://www.googleapis.com/youtube/v3"

    async def search_candidates(
        self,
        query: str,
        limit: int = 10,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> list[VideoCandidate]:
        """Search for videos matching ``query`` and return them in API order."""

        params: dict[str, str] = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": str(limit),
            "key": self.api_key,
        }

        async def _perform_search(client: httpx.AsyncClient) -> list[VideoCandidate]:
            try:
                response = await client.get(f"{self.base_url}/search", params=params)
            except httpx.HTTPError as exc:
                raise YouTubeAPIError(f"YouTube search request failed: {exc}") from exc

            if response.status_code != HTTPStatus.OK:
                raise YouTubeAPIError(
                    "YouTube search request failed: "
                    f"status={response.status_code}, body={response.text}"
                )

            try:
                payload_raw = response.json()
            except ValueError as exc:
                raise YouTubeAPIError("YouTube search response was not valid JSON") from exc

            if not isinstance(payload_raw, Mapping):
                raise YouTubeAPIError("YouTube search response had unexpected structure")

            items_raw = cast(Mapping[str, Any], payload_raw).get("items")
            if not isinstance(items_raw, Sequence):
                return []

            return [
                candidate
                for candidate in (parse_video_candidate(item) for item in items_raw)
                if candidate is not None
            ]

        if http_client is not None:
            return await _perform_search(http_client)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await _perform_search(client)


def parse_video_candidate(item: Any) -> VideoCandidate | None:
    """Build a candidate from one search item, skipping entries without a video id."""

    if not isinstance(item, Mapping):
        return None

    item_map = cast(Mapping[str, Any], item)
    id_obj = item_map.get("id")
    if isinstance(id_obj, Mapping):
        video_id = cast(Mapping[str, Any], id_obj).get("videoId")
    else:
        video_id = id_obj
    if not isinstance(video_id, str) or not video_id:
        return None

    snippet_obj = item_map.get("snippet")
    snippet = cast(Mapping[str, Any], snippet_obj) if isinstance(snippet_obj, Mapping) else {}

    # The search endpoint returns HTML-escaped titles, e.g. "Don&#39;t"
    return VideoCandidate(
        video_id=video_id,
        title=html.unescape(str(snippet.get("title") or "")),
        description=html.unescape(str(snippet.get("description") or "")),
    )


def build_youtube_client(settings: AppSettings) -> YouTubeClient:
    """Create a YouTubeClient instance from application settings."""

    if not settings.youtube_api_key:
        raise YouTubeClientConfigError("A YouTube API key is required to instantiate YouTubeClient")

    return YouTubeClient(api_key=settings.youtube_api_key)
