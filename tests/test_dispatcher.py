from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from song_recommender.errors import MalformedResponseError, UpstreamFetchError
from song_recommender.schemas import (
    ActionRowBlock,
    NavigationAction,
    SectionBlock,
    parse_search_page,
)
from song_recommender.services import (
    ActionDispatcher,
    fetch_page,
    navigate,
    parse_navigation_action,
)

CURSOR = "https://api.spotify.com/v1/search?query=daft&type=track&offset=5&limit=5"


def _catalog_returning(page_payload: dict[str, Any]) -> AsyncMock:
    catalog = AsyncMock()
    catalog.fetch_by_cursor.return_value = parse_search_page(page_payload)
    return catalog


@pytest.mark.asyncio
async def test_fetch_page_uses_cursor_verbatim(
    search_payload: Callable[..., dict[str, Any]],
) -> None:
    catalog = _catalog_returning(search_payload())

    await fetch_page(catalog, CURSOR)

    catalog.fetch_by_cursor.assert_awaited_once_with(CURSOR)


@pytest.mark.asyncio
async def test_fetch_page_rejects_empty_cursor() -> None:
    catalog = AsyncMock()

    with pytest.raises(UpstreamFetchError):
        await fetch_page(catalog, "")

    catalog.fetch_by_cursor.assert_not_called()


@pytest.mark.asyncio
async def test_navigate_renders_without_summary(
    search_payload: Callable[..., dict[str, Any]],
) -> None:
    catalog = _catalog_returning(search_payload(total=42, previous_url=CURSOR))
    action = NavigationAction(action_id="next_results", opaque_value=CURSOR)

    blocks = await navigate(catalog, action, page_size=5)

    catalog.fetch_by_cursor.assert_awaited_once_with(CURSOR)
    assert not (isinstance(blocks[0], SectionBlock) and "results:" in blocks[0].text)
    navigation = blocks[-1]
    assert isinstance(navigation, ActionRowBlock)
    assert navigation.buttons[0].label == "< Previous 5"


def test_parse_navigation_action_accepts_known_ids() -> None:
    action = parse_navigation_action("previous_results", CURSOR)

    assert action == NavigationAction(action_id="previous_results", opaque_value=CURSOR)


def test_parse_navigation_action_ignores_unknown_ids() -> None:
    assert parse_navigation_action("something_else", "value") is None


@pytest.mark.asyncio
async def test_dispatch_selection_posts_recommendation() -> None:
    catalog = AsyncMock()
    respond = AsyncMock()
    dispatcher = ActionDispatcher(catalog=catalog)
    action = NavigationAction(
        action_id="song_select_button", opaque_value="https://open.spotify.com/track/abc"
    )

    await dispatcher.dispatch(action, user_id="U42", respond=respond)

    respond.assert_awaited_once()
    payload = respond.await_args.args[0]
    assert payload["response_type"] == "in_channel"
    assert payload["text"] == "<@U42> recommends: https://open.spotify.com/track/abc"
    assert payload["delete_original"] is True
    catalog.fetch_by_cursor.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("action_id", ["next_results", "previous_results"])
async def test_dispatch_navigation_replaces_page(
    search_payload: Callable[..., dict[str, Any]], action_id: str
) -> None:
    catalog = _catalog_returning(search_payload(next_url=CURSOR))
    respond = AsyncMock()
    dispatcher = ActionDispatcher(catalog=catalog, page_size=5)

    await dispatcher.dispatch(
        NavigationAction(action_id=action_id, opaque_value=CURSOR),  # type: ignore[arg-type]
        user_id="U1",
        respond=respond,
    )

    catalog.fetch_by_cursor.assert_awaited_once_with(CURSOR)
    payload = respond.await_args.args[0]
    assert payload["replace_original"] is True
    assert payload["response_type"] == "ephemeral"
    assert payload["blocks"][0] == {"type": "divider"}
    assert payload["blocks"][-1]["elements"][0]["value"] == CURSOR


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [UpstreamFetchError("timeout"), MalformedResponseError("no tracks")],
)
async def test_dispatch_navigation_failure_keeps_previous_page(
    error: Exception, caplog: pytest.LogCaptureFixture
) -> None:
    catalog = AsyncMock()
    catalog.fetch_by_cursor.side_effect = error
    respond = AsyncMock()
    dispatcher = ActionDispatcher(catalog=catalog)

    with caplog.at_level("ERROR"):
        await dispatcher.dispatch(
            NavigationAction(action_id="next_results", opaque_value=CURSOR),
            user_id="U1",
            respond=respond,
        )

    respond.assert_awaited_once()
    payload = respond.await_args.args[0]
    assert payload["response_type"] == "ephemeral"
    assert payload["replace_original"] is False
    assert "blocks" not in payload
    assert str(error) in payload["text"]
    assert "Failed to load next_results page" in caplog.text


@pytest.mark.asyncio
async def test_dispatch_navigation_without_catalog_reports_error() -> None:
    respond = AsyncMock()
    dispatcher = ActionDispatcher(catalog=None)

    await dispatcher.dispatch(
        NavigationAction(action_id="previous_results", opaque_value=CURSOR),
        user_id="U1",
        respond=respond,
    )

    payload = respond.await_args.args[0]
    assert payload["replace_original"] is False
    assert "not configured" in payload["text"]
