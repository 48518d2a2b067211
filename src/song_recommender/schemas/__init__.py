"""Shared Pydantic models used across the application."""

from .blocks import (
    NEXT_RESULTS_ACTION,
    PREVIOUS_RESULTS_ACTION,
    SONG_SELECT_ACTION,
    ActionButton,
    ActionRowBlock,
    ContextBlock,
    DividerBlock,
    NavigationAction,
    SectionBlock,
    UIBlock,
)
from .catalog import (
    CatalogAlbum,
    CatalogArtist,
    CatalogImage,
    CatalogTrack,
    SearchPage,
    catalog_path,
    parse_catalog_track,
    parse_search_page,
)
from .slack import (
    SlackBlockAction,
    SlackBlockActionsPayload,
    SlackEventEnvelope,
    SlackMessageEvent,
    SlackSlashCommand,
    SlackUser,
)

__all__ = [
    "NEXT_RESULTS_ACTION",
    "PREVIOUS_RESULTS_ACTION",
    "SONG_SELECT_ACTION",
    "ActionButton",
    "ActionRowBlock",
    "CatalogAlbum",
    "CatalogArtist",
    "CatalogImage",
    "CatalogTrack",
    "ContextBlock",
    "DividerBlock",
    "NavigationAction",
    "SearchPage",
    "SectionBlock",
    "SlackBlockAction",
    "SlackBlockActionsPayload",
    "SlackEventEnvelope",
    "SlackMessageEvent",
    "SlackSlashCommand",
    "SlackUser",
    "UIBlock",
    "catalog_path",
    "parse_catalog_track",
    "parse_search_page",
]
