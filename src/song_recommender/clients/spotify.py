"""Thin wrapper around the Spotify Web API."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional, cast
from urllib.parse import quote

import httpx

from song_recommender.config.settings import AppSettings
from song_recommender.errors import UpstreamFetchError
from song_recommender.schemas import (
    CatalogTrack,
    SearchPage,
    catalog_path,
    parse_catalog_track,
    parse_search_page,
)


class SpotifyClientConfigError(ValueError):
    """Raised when Spotify credentials are missing or invalid."""


class SpotifyAuthenticationError(UpstreamFetchError):
    """Raised when Spotify fails to issue an access token."""


class SpotifyAPIError(UpstreamFetchError):
    """Raised when a Spotify Web API request fails."""


@dataclass(slots=True)
class SpotifyAccessToken:
    """Container for Spotify access token metadata."""

    access_token: str
    token_type: str
    expires_in: int
    acquired_at: datetime

    def expires_at(self) -> datetime:
        """Return the absolute UTC expiry timestamp."""

        return self.acquired_at + timedelta(seconds=self.expires_in)

    def is_expired(self, *, buffer_seconds: int = 0) -> bool:
        """Return True if the token is expired (optionally with a buffer)."""

        threshold = self.expires_at() - timedelta(seconds=buffer_seconds)
        return datetime.now(timezone.utc) >= threshold


@dataclass(slots=True)
class SpotifyClient:
    """Spotify catalog client for track search, cursor paging and id lookups."""

    client_id: str
    client_secret: str
    base_url: str = "https://api.spotify.com/v1"
    token_url: str = "https://accounts.spotify.com/api/token"
    _token_cache: Optional[SpotifyAccessToken] = field(default=None, init=False, repr=False)

    _EMPTY_MAPPING: ClassVar[Mapping[str, Any]] = MappingProxyType({})

    async def search(
        self,
        query: str,
        *,
        type: str = "track",
        limit: int = 5,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> SearchPage:
        """Search the catalog and return the first page of results."""

        if not query.strip():
            raise ValueError("Spotify searches must specify a query")

        params: dict[str, str] = {
            "q": query,
            "type": type,
            "limit": str(limit),
        }
        payload = await self._get_json(
            f"{self.base_url}/search",
            params=params,
            operation="search",
            http_client=http_client,
            timeout=timeout,
        )
        return parse_search_page(payload)

    async def fetch_by_cursor(
        self,
        cursor: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> SearchPage:
        """Fetch the page behind a ``next``/``previous`` URL returned by a search.

        The cursor is requested verbatim. It must point at ``base_url`` so the
        access token is never sent to another host.
        """

        if not cursor.startswith(f"{self.base_url}/"):
            raise SpotifyAPIError("Spotify cursor does not point at the Spotify Web API")

        payload = await self._get_json(
            cursor,
            params=None,
            operation="cursor",
            http_client=http_client,
            timeout=timeout,
        )
        return parse_search_page(payload)

    async def fetch_by_id(
        self,
        id_type: str,
        item_id: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> CatalogTrack:
        """Fetch a single track by the type and id taken from a shared link."""

        path = catalog_path(quote(id_type, safe=""), quote(item_id, safe=""))
        url = f"{self.base_url}/{path}"
        payload = await self._get_json(
            url,
            params=None,
            operation="lookup",
            http_client=http_client,
            timeout=timeout,
        )
        return parse_catalog_track(payload)

    async def _get_json(
        self,
        url: str,
        *,
        params: Optional[dict[str, str]],
        operation: str,
        http_client: Optional[httpx.AsyncClient],
        timeout: Optional[float],
    ) -> Any:
        token = await self.get_access_token(
            http_client=http_client,
            timeout=timeout,
        )

        headers = {
            "Authorization": f"{token.token_type} {token.access_token}",
            "Accept": "application/json",
        }

        async def _perform_request(client: httpx.AsyncClient) -> Any:
            try:
                response = await client.get(url, params=params, headers=headers)
            except httpx.HTTPError as exc:
                raise SpotifyAPIError(f"Spotify {operation} request failed: {exc}") from exc

            if response.status_code != HTTPStatus.OK:
                raise SpotifyAPIError(
                    f"Spotify {operation} request failed: "
                    f"status={response.status_code}, detail={self._error_detail(response)}"
                )

            try:
                return response.json()
            except ValueError as exc:
                raise SpotifyAPIError(f"Spotify {operation} response was not valid JSON") from exc

        if http_client is not None:
            return await _perform_request(http_client)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await _perform_request(client)

    def _error_detail(self, response: httpx.Response) -> str:
        try:
            payload_obj = response.json()
        except ValueError:
            payload_obj = {}

        if isinstance(payload_obj, Mapping):
            payload_map = cast(Mapping[str, Any], payload_obj)
        else:
            payload_map = self._EMPTY_MAPPING

        error_obj: Any = payload_map.get("error") if payload_map else None
        if isinstance(error_obj, Mapping):
            error_map = cast(Mapping[str, Any], error_obj)
            message = error_map.get("message")
            return str(message) if message is not None else str(dict(error_map))

        return str(error_obj or response.text or "Unknown error")

    async def get_client_credentials_token(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: Optional[float] = 10.0,
    ) -> SpotifyAccessToken:
        """Fetch a client-credentials access token from Spotify."""

        authorization = base64.b64encode(f"{self.client_id}:{self.client_secret}".encode("utf-8"))
        headers = {
            "Authorization": f"Basic {authorization.decode('ascii')}",
            "Content-Type": "application/x-www-form-urlencoded",
        }

        async def _request_token(client: httpx.AsyncClient) -> SpotifyAccessToken:
            try:
                response = await client.post(
                    self.token_url,
                    data={"grant_type": "client_credentials"},
                    headers=headers,
                )
            except httpx.HTTPError as exc:
                raise SpotifyAuthenticationError(
                    f"Failed to obtain Spotify access token: {exc}"
                ) from exc

            if response.status_code != HTTPStatus.OK:
                message: str
                try:
                    body = response.json()
                    message = body.get("error_description") or body.get("error") or "Unknown error"
                except (ValueError, AttributeError):
                    message = response.text or "Unknown error"

                raise SpotifyAuthenticationError(
                    "Failed to obtain Spotify access token: "
                    f"status={response.status_code}, detail={message}"
                )

            payload = response.json()

            return SpotifyAccessToken(
                access_token=payload["access_token"],
                token_type=payload.get("token_type", "Bearer"),
                expires_in=int(payload.get("expires_in", 3600)),
                acquired_at=datetime.now(timezone.utc),
            )

        if http_client is not None:
            return await _request_token(http_client)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await _request_token(client)

    async def get_access_token(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        force_refresh: bool = False,
        buffer_seconds: int = 5,
        timeout: Optional[float] = 10.0,
    ) -> SpotifyAccessToken:
        """Return a valid (cached) client-credentials access token."""

        token = self._token_cache
        if not force_refresh and token is not None and not token.is_expired(buffer_seconds=buffer_seconds):
            return token

        token = await self.get_client_credentials_token(http_client, timeout=timeout)
        self._token_cache = token
        return token


def build_spotify_client(settings: AppSettings) -> SpotifyClient:
    """Create a SpotifyClient instance from application settings."""

    if not settings.spotify_client_id or not settings.spotify_client_secret:
        raise SpotifyClientConfigError(
            "Spotify client credentials are required to instantiate SpotifyClient"
        )

    return SpotifyClient(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
    )
