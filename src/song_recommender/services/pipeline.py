"""Entry points for slash-command searches and shared links.

Both inputs run through one pipeline. The cross-platform stage only runs for
shared links and only when a secondary catalog client is configured.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from song_recommender.clients.youtube import VideoCandidate
from song_recommender.errors import MalformedLinkError, NoMatchError
from song_recommender.logger import get_logger
from song_recommender.schemas import CatalogTrack, SearchPage, UIBlock
from song_recommender.services.canonical import CanonicalIdentity, extract_canonical_identity
from song_recommender.services.formatter import DEFAULT_PAGE_SIZE, format_search_results
from song_recommender.services.fuzzy_resolver import best_match
from song_recommender.services.link_parser import SharedLink, find_shared_link, parse_shared_link

logger = get_logger(__name__)

DEFAULT_CANDIDATE_LIMIT = 10
SUPPORTED_LINK_TYPE = "track"


def normalize_query(content: Optional[str]) -> Optional[str]:
    """Return a cleaned search query from raw slash command text."""

    if content is None:
        return None

    cleaned = content.strip()
    if not cleaned:
        return None

    normalized = re.sub(r"\s+", " ", cleaned)
    return normalized or None


class MusicCatalog(Protocol):
    async def search(self, query: str, *, type: str = "track", limit: int = ...) -> SearchPage: ...

    async def fetch_by_cursor(self, cursor: str) -> SearchPage: ...

    async def fetch_by_id(self, id_type: str, item_id: str) -> CatalogTrack: ...


class SecondaryCatalog(Protocol):
    async def search_candidates(self, query: str, limit: int = ...) -> Sequence[VideoCandidate]: ...


@dataclass(slots=True, frozen=True)
class LinkResolution:
    link: SharedLink
    identity: CanonicalIdentity
    match: Optional[VideoCandidate] = None


@dataclass(slots=True)
class RecommendationPipeline:
    catalog: MusicCatalog
    secondary: Optional[SecondaryCatalog] = None
    page_size: int = DEFAULT_PAGE_SIZE
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT

    async def search(self, query: str) -> list[UIBlock]:
        """Run a track search and return the first page of result blocks."""

        logger.info("Searching catalog for %r", query)
        page = await self.catalog.search(query, type="track", limit=self.page_size)
        logger.info("Catalog returned %d of %d results", len(page.items), page.total)
        return format_search_results(page, query, page_size=self.page_size)

    async def resolve_shared_link(self, content: str) -> LinkResolution:
        """Resolve a shared track link to its canonical identity and best secondary match."""

        raw_link = find_shared_link(content) or content
        link = parse_shared_link(raw_link)
        if link.id_type != SUPPORTED_LINK_TYPE:
            raise MalformedLinkError(f"Only track links are supported, got {link.id_type!r}")

        track = await self.catalog.fetch_by_id(link.id_type, link.id)
        identity = extract_canonical_identity(track)
        logger.info("Shared link resolved to %s", identity.query_string)

        if self.secondary is None:
            return LinkResolution(link=link, identity=identity)

        candidates = await self.secondary.search_candidates(
            identity.query_string, self.candidate_limit
        )
        try:
            match = best_match(identity.query_string, candidates)
        except NoMatchError:
            logger.info("No secondary catalog match for %s", identity.query_string)
            return LinkResolution(link=link, identity=identity)

        logger.info("Best secondary catalog match: %s (%s)", match.title, match.url)
        return LinkResolution(link=link, identity=identity, match=match)

    def build_link_announcement(self, user_id: str, resolution: LinkResolution) -> str:
        """Channel message describing a shared track and its YouTube match, if any."""

        identity = resolution.identity
        message = (
            f"Nice! <@{user_id}> posted a Spotify link for *{identity.track}* "
            f"by *{identity.artist}* from the album *{identity.album}*. :musical_note:"
        )
        if resolution.match is not None:
            return f"{message}\nYou can also check it out on YouTube here: {resolution.match.url}"
        if self.secondary is not None:
            return f"{message}\nI couldn't find a matching video on YouTube."
        return message


def build_greeting(user_id: str) -> str:
    """Reply to a user who says hello."""

    return f"Hey there <@{user_id}>!"
