"""Service layer modules for the Song Recommender bot."""

from .canonical import CanonicalIdentity, extract_canonical_identity
from .dispatcher import ActionDispatcher, Respond, parse_navigation_action
from .formatter import format_duration, format_search_results
from .fuzzy_resolver import best_match, rank_candidates, score_candidate
from .link_parser import SharedLink, find_shared_link, parse_shared_link
from .pagination import fetch_page, navigate
from .pipeline import LinkResolution, RecommendationPipeline, build_greeting, normalize_query
from .slack_blocks import (
    build_error_response,
    build_results_response,
    build_selection_response,
    render_blocks,
)

__all__ = [
    "ActionDispatcher",
    "CanonicalIdentity",
    "LinkResolution",
    "RecommendationPipeline",
    "Respond",
    "SharedLink",
    "best_match",
    "build_error_response",
    "build_greeting",
    "build_results_response",
    "build_selection_response",
    "extract_canonical_identity",
    "fetch_page",
    "find_shared_link",
    "format_duration",
    "format_search_results",
    "navigate",
    "normalize_query",
    "parse_navigation_action",
    "parse_shared_link",
    "rank_candidates",
    "render_blocks",
    "score_candidate",
]
