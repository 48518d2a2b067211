"""Turn a page of Spotify search results into renderable UI blocks."""

from __future__ import annotations

from typing import Optional

from song_recommender.logger import get_logger
from song_recommender.schemas import (
    NEXT_RESULTS_ACTION,
    PREVIOUS_RESULTS_ACTION,
    SONG_SELECT_ACTION,
    ActionButton,
    ActionRowBlock,
    CatalogTrack,
    ContextBlock,
    DividerBlock,
    SearchPage,
    SectionBlock,
    UIBlock,
)

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 5
THUMBNAIL_IMAGE_INDEX = 1

_DURATION_UNITS = (("d", 86_400), ("h", 3_600), ("m", 60))


def escape_mrkdwn(value: str) -> str:
    """Escape the control characters Slack mrkdwn reserves."""

    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def mrkdwn_link(url: str, label: str) -> str:
    """Render a mrkdwn link, or just the escaped label when there is no url."""

    if not url:
        return escape_mrkdwn(label)
    return f"<{url}|{escape_mrkdwn(label)}>"


def format_duration(duration_ms: int) -> str:
    """Render a duration like ``3m 45s``, truncated to whole seconds."""

    remaining = max(duration_ms, 0) // 1000
    parts: list[str] = []
    for suffix, size in _DURATION_UNITS:
        value, remaining = divmod(remaining, size)
        if value or parts:
            parts.append(f"{value}{suffix}")
    parts.append(f"{remaining}s")
    return " ".join(parts)


def build_summary_block(total: int, query: str) -> SectionBlock:
    """Header line shown above the first page of results."""

    return SectionBlock(
        text=f'Search for "{escape_mrkdwn(query)}" returned *{total}* results:'
    )


def build_track_blocks(track: CatalogTrack) -> list[UIBlock]:
    """Return the blocks for one track, with a Select row when it has a Spotify url."""

    artist = track.artists[0]
    text = (
        f"*{mrkdwn_link(track.external_url, track.name)}*\n"
        f"{mrkdwn_link(track.album.external_url, track.album.name)}\n"
        f"_{mrkdwn_link(artist.external_url, artist.name)}_"
    )

    image_url: Optional[str] = None
    image_alt: Optional[str] = None
    if len(track.album.images) > THUMBNAIL_IMAGE_INDEX:
        image_url = track.album.images[THUMBNAIL_IMAGE_INDEX].url
        image_alt = f"{artist.name} {track.album.name} thumbnail"
    else:
        logger.warning(
            "Album for track %s has %d image(s); rendering without a thumbnail",
            track.id,
            len(track.album.images),
        )

    blocks: list[UIBlock] = [
        DividerBlock(),
        SectionBlock(text=text, image_url=image_url, image_alt=image_alt),
        ContextBlock(text=format_duration(track.duration_ms)),
    ]

    # Slack rejects buttons with an empty value
    if not track.external_url:
        logger.warning("Track %s has no Spotify url; rendering without a Select button", track.id)
        return blocks

    blocks.append(
        ActionRowBlock(
            buttons=(
                ActionButton(
                    label="Select",
                    opaque_value=track.external_url,
                    action_id=SONG_SELECT_ACTION,
                ),
            )
        )
    )
    return blocks


def build_pagination_buttons(page: SearchPage, page_size: int) -> list[ActionButton]:
    """Previous/next buttons for whichever cursors the page carries."""

    buttons: list[ActionButton] = []
    if page.previous_cursor:
        buttons.append(
            ActionButton(
                label=f"< Previous {page_size}",
                opaque_value=page.previous_cursor,
                action_id=PREVIOUS_RESULTS_ACTION,
            )
        )
    if page.next_cursor:
        buttons.append(
            ActionButton(
                label=f"Next {page_size} >",
                opaque_value=page.next_cursor,
                action_id=NEXT_RESULTS_ACTION,
            )
        )
    return buttons


def format_search_results(
    page: SearchPage,
    query: Optional[str] = None,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[UIBlock]:
    """Convert a search page into an ordered list of UI blocks.

    Parameters
    ----------
    page:
        Validated search page returned by the catalog client.
    query:
        Original search text. Only known for the first page; pages reached
        through a cursor are rendered without the summary header.
    page_size:
        Number shown on the navigation button labels.
    """

    blocks: list[UIBlock] = []
    if query:
        blocks.append(build_summary_block(page.total, query))

    for track in page.items:
        blocks.extend(build_track_blocks(track))

    navigation = build_pagination_buttons(page, page_size)
    if navigation:
        blocks.append(DividerBlock())
        blocks.append(ActionRowBlock(buttons=tuple(navigation)))

    return blocks
