"""Pydantic models for Spotify catalog records and paged search responses.

Spotify responses are loosely shaped JSON. They are validated once here, at the
client boundary, so the formatter and resolver can rely on a strict shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import AliasPath, BaseModel, ConfigDict, Field, ValidationError

from song_recommender.errors import MalformedResponseError


class CatalogImage(BaseModel):
    """Album artwork at one resolution."""

    model_config = ConfigDict(frozen=True)

    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class CatalogArtist(BaseModel):
    """Artist credited on a track."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    external_url: str = Field(default="", validation_alias=AliasPath("external_urls", "spotify"))


class CatalogAlbum(BaseModel):
    """Album a track belongs to; images are ordered from largest to smallest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    external_url: str = Field(default="", validation_alias=AliasPath("external_urls", "spotify"))
    images: tuple[CatalogImage, ...] = ()


class CatalogTrack(BaseModel):
    """Immutable snapshot of one Spotify track record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    artists: tuple[CatalogArtist, ...] = Field(min_length=1)
    album: CatalogAlbum
    duration_ms: int = Field(ge=0)
    external_url: str = Field(default="", validation_alias=AliasPath("external_urls", "spotify"))
    popularity: Optional[int] = None
    explicit: bool = False


class SearchPage(BaseModel):
    """One page of a paged track search.

    ``next_cursor`` and ``previous_cursor`` are the URLs Spotify hands back for
    the adjacent pages. They are forwarded untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int = Field(ge=0)
    items: tuple[CatalogTrack, ...] = ()
    next_cursor: Optional[str] = Field(default=None, validation_alias="next")
    previous_cursor: Optional[str] = Field(default=None, validation_alias="previous")


def parse_search_page(payload: Any) -> SearchPage:
    """Validate a Spotify search (or cursor) response into a :class:`SearchPage`."""

    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Catalog response had unexpected format")

    tracks = payload.get("tracks")
    if not isinstance(tracks, Mapping):
        raise MalformedResponseError(
            "Data not in correct form: expecting an object with a tracks attribute"
        )

    try:
        return SearchPage.model_validate(tracks)
    except ValidationError as exc:
        raise MalformedResponseError(f"Catalog search page was malformed: {exc}") from exc


def parse_catalog_track(payload: Any) -> CatalogTrack:
    """Validate a single Spotify track object into a :class:`CatalogTrack`."""

    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Catalog track response had unexpected format")

    try:
        return CatalogTrack.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(f"Catalog track was malformed: {exc}") from exc


def catalog_path(id_type: str, item_id: str) -> str:
    """Relative Web API path of a catalog resource, e.g. ``tracks/abc123``."""

    return f"{id_type}s/{item_id}"
