"""Utilities for extracting catalog identifiers from shared links."""

import re
from dataclasses import dataclass
from typing import Optional

from song_recommender.errors import MalformedLinkError
from song_recommender.schemas.catalog import catalog_path as build_catalog_path

SPOTIFY_LINK_DOMAIN = "open.spotify.com"

_PROTOCOL_PATTERN = re.compile(r"https?://")
_QUERY_SUFFIX_PATTERN = re.compile(r"[?#]")
_LOCALE_SEGMENT_PATTERN = re.compile(r"^intl-[a-z]{2}$", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class SharedLink:
    domain: str
    id_type: str
    id: str

    @property
    def catalog_path(self) -> str:
        return build_catalog_path(self.id_type, self.id)


def find_shared_link(content: Optional[str], domain: str = SPOTIFY_LINK_DOMAIN) -> Optional[str]:
    """Return the first link to ``domain`` found in a chat message."""

    if not content:
        return None

    pattern = re.compile(rf"https?://{re.escape(domain)}/[^\s<>|]+")
    match = pattern.search(content)
    return match.group(0) if match else None


def parse_shared_link(link: str) -> SharedLink:
    """Split a shared link like ``<https://domain/track/id?si=x>`` into its parts.

    Raises :class:`MalformedLinkError` when fewer than three path segments remain
    after the protocol and chat markup are stripped.
    """

    cleaned = _PROTOCOL_PATTERN.sub("", link.strip(), count=1)
    cleaned = cleaned.replace("<", "").replace(">", "")
    # Slack wraps labelled links as <url|label>
    cleaned = cleaned.split("|", 1)[0].strip()

    segments = cleaned.split("/")
    if len(segments) > 3 and _LOCALE_SEGMENT_PATTERN.match(segments[1]):
        del segments[1]

    if len(segments) < 3:
        raise MalformedLinkError(f"Link does not contain a domain, type and id: {link!r}")

    domain, id_type = segments[0], segments[1]
    item_id = _QUERY_SUFFIX_PATTERN.split(segments[2], maxsplit=1)[0]
    if not domain or not id_type or not item_id:
        raise MalformedLinkError(f"Link has an empty domain, type or id: {link!r}")

    return SharedLink(domain=domain, id_type=id_type, id=item_id)
