"""Route block actions (select, next, previous) to their handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from song_recommender.errors import MalformedResponseError, UpstreamFetchError
from song_recommender.logger import get_logger
from song_recommender.schemas import (
    NEXT_RESULTS_ACTION,
    PREVIOUS_RESULTS_ACTION,
    SONG_SELECT_ACTION,
    NavigationAction,
)
from song_recommender.services.formatter import DEFAULT_PAGE_SIZE
from song_recommender.services.pagination import CursorCatalog, navigate
from song_recommender.services.slack_blocks import (
    build_error_response,
    build_results_response,
    build_selection_response,
)

logger = get_logger(__name__)

CATALOG_UNAVAILABLE_MESSAGE = "Spotify search is not configured right now."

Respond = Callable[[dict[str, Any]], Awaitable[Any]]


def parse_navigation_action(action_id: str, value: Optional[str]) -> NavigationAction | None:
    """Return a :class:`NavigationAction` or ``None`` for ids the bot does not own."""

    try:
        return NavigationAction(action_id=action_id, opaque_value=value or "")  # type: ignore[arg-type]
    except ValidationError:
        logger.info("Ignoring unsupported Slack action: %s", action_id)
        return None


@dataclass(slots=True)
class ActionDispatcher:
    """Handle one block action at a time; no state is shared between actions."""

    catalog: Optional[CursorCatalog]
    page_size: int = DEFAULT_PAGE_SIZE

    async def dispatch(self, action: NavigationAction, *, user_id: str, respond: Respond) -> None:
        if action.action_id == SONG_SELECT_ACTION:
            await self.handle_selection(action, user_id=user_id, respond=respond)
        elif action.action_id in (NEXT_RESULTS_ACTION, PREVIOUS_RESULTS_ACTION):
            await self.handle_navigation(action, respond=respond)
        else:  # pragma: no cover - NavigationAction only admits the ids above
            logger.warning("No handler registered for action %s", action.action_id)

    async def handle_selection(
        self, action: NavigationAction, *, user_id: str, respond: Respond
    ) -> None:
        """Post the chosen track publicly and remove the result view."""

        logger.info("User %s selected %s", user_id, action.opaque_value)
        await respond(build_selection_response(user_id, action.opaque_value))

    async def handle_navigation(self, action: NavigationAction, *, respond: Respond) -> None:
        """Replace the current page with the adjacent one, or keep it on failure."""

        if self.catalog is None:
            logger.warning("Navigation requested but no catalog client is configured")
            await respond(build_error_response(CATALOG_UNAVAILABLE_MESSAGE))
            return

        try:
            blocks = await navigate(self.catalog, action, page_size=self.page_size)
        except (UpstreamFetchError, MalformedResponseError) as exc:
            logger.exception("Failed to load %s page", action.action_id)
            await respond(build_error_response(f"Uh oh! An error occurred: {exc}"))
            return

        logger.info("Rendering %s page with %d blocks", action.action_id, len(blocks))
        await respond(build_results_response(blocks))
