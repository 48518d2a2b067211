"""Client integrations for external services."""

from .slack import SlackAPIError, SlackClient, build_slack_client
from .spotify import (
    SpotifyAccessToken,
    SpotifyAPIError,
    SpotifyAuthenticationError,
    SpotifyClient,
    SpotifyClientConfigError,
    build_spotify_client,
)
from .youtube import (
    VideoCandidate,
    YouTubeAPIError,
    YouTubeClient,
    YouTubeClientConfigError,
    build_youtube_client,
)

__all__ = [
    "SlackAPIError",
    "SlackClient",
    "SpotifyAPIError",
    "SpotifyAccessToken",
    "SpotifyAuthenticationError",
    "SpotifyClient",
    "SpotifyClientConfigError",
    "VideoCandidate",
    "YouTubeAPIError",
    "YouTubeClient",
    "YouTubeClientConfigError",
    "build_slack_client",
    "build_spotify_client",
    "build_youtube_client",
]
