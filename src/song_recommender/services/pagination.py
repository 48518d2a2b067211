"""Cursor-based navigation between pages of a catalog search.

Cursors are the ``next``/``previous`` URLs returned by the catalog itself. They
travel inside the rendered buttons and come back verbatim with the click, so no
search state is kept on the server. The original query cannot be recovered from
a cursor, so navigated pages are rendered without the summary header.
"""

from __future__ import annotations

from typing import Protocol

from song_recommender.errors import UpstreamFetchError
from song_recommender.logger import get_logger
from song_recommender.schemas import NavigationAction, SearchPage, UIBlock
from song_recommender.services.formatter import DEFAULT_PAGE_SIZE, format_search_results

logger = get_logger(__name__)


class CursorCatalog(Protocol):
    async def fetch_by_cursor(self, cursor: str) -> SearchPage: ...


async def fetch_page(catalog: CursorCatalog, cursor: str) -> SearchPage:
    """Fetch the page addressed by ``cursor`` without inspecting it."""

    if not cursor:
        raise UpstreamFetchError("Navigation action did not carry a cursor")

    logger.info("Fetching catalog page by cursor")
    return await catalog.fetch_by_cursor(cursor)


async def navigate(
    catalog: CursorCatalog,
    action: NavigationAction,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[UIBlock]:
    """Fetch the page referenced by a next/previous action and format it."""

    page = await fetch_page(catalog, action.opaque_value)
    return format_search_results(page, None, page_size=page_size)
