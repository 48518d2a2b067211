"""Slack slash command, interactivity and Events API endpoints.

Slack expects every request to be acknowledged within three seconds, so each
handler returns immediately and runs the slow work as a background task.
Results are delivered through the interaction's ``response_url`` or the Web API.
"""

import re
from functools import partial
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from song_recommender.clients import SlackAPIError, SlackClient, SpotifyClient, YouTubeClient
from song_recommender.config.settings import get_settings
from song_recommender.errors import RecommenderError
from song_recommender.logger import get_logger
from song_recommender.schemas import (
    NavigationAction,
    SlackBlockActionsPayload,
    SlackEventEnvelope,
    SlackMessageEvent,
    SlackSlashCommand,
)
from song_recommender.services import (
    ActionDispatcher,
    RecommendationPipeline,
    Respond,
    build_error_response,
    build_greeting,
    build_results_response,
    find_shared_link,
    normalize_query,
    parse_navigation_action,
)
from song_recommender.services.dispatcher import CATALOG_UNAVAILABLE_MESSAGE

router = APIRouter(prefix="/slack", tags=["slack"])
logger = get_logger(__name__)

USAGE_MESSAGE = "Tell me what to look for, e.g. `/recommend daft punk one more time`."
UNEXPECTED_ERROR_MESSAGE = "Uh oh! Something went wrong while handling that request."

_GREETING_PATTERN = re.compile(r"\bhello\b", re.IGNORECASE)


@router.post("/commands")
async def handle_slash_command(request: Request, background_tasks: BackgroundTasks) -> Response:
    """Acknowledge a ``/recommend`` command and search the catalog in the background."""

    form = await request.form()
    try:
        command = SlackSlashCommand.model_validate(dict(form))
    except ValidationError:
        logger.warning("Received malformed Slack slash command payload")
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    logger.info(
        "Received Slack command: command=%s, user_id=%s, text=%s",
        command.command,
        command.user_id,
        command.text,
    )

    query = normalize_query(command.text)
    if query is None:
        return JSONResponse(content=build_error_response(USAGE_MESSAGE))

    pipeline = get_pipeline_from_request(request)
    if pipeline is None:
        logger.warning("Spotify client unavailable; cannot run search for %s", command.user_id)
        return JSONResponse(content=build_error_response(CATALOG_UNAVAILABLE_MESSAGE))

    slack_client = get_slack_client_from_request(request)
    background_tasks.add_task(run_search_command, pipeline, slack_client, command, query)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/actions")
async def handle_block_actions(request: Request, background_tasks: BackgroundTasks) -> Response:
    """Acknowledge button clicks and dispatch them in the background."""

    form = await request.form()
    raw_payload = form.get("payload")
    if not isinstance(raw_payload, str):
        logger.warning("Slack interactivity request did not include a payload")
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    try:
        payload = SlackBlockActionsPayload.model_validate_json(raw_payload)
    except ValidationError:
        logger.warning("Received malformed Slack interactivity payload")
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    if payload.type != "block_actions" or not payload.response_url:
        logger.info("Ignoring Slack interactivity payload of type %s", payload.type)
        return Response(status_code=status.HTTP_200_OK)

    dispatcher = ActionDispatcher(
        catalog=get_spotify_client_from_request(request),
        page_size=get_settings().search_limit,
    )
    slack_client = get_slack_client_from_request(request)

    for raw_action in payload.actions:
        action = parse_navigation_action(raw_action.action_id, raw_action.value)
        if action is None:
            continue

        logger.info("Received Slack action %s from user %s", action.action_id, payload.user.id)
        background_tasks.add_task(
            run_block_action,
            dispatcher,
            slack_client,
            action,
            payload.user.id,
            payload.response_url,
        )

    return Response(status_code=status.HTTP_200_OK)


@router.post("/events")
async def handle_event(
    request: Request, payload: SlackEventEnvelope, background_tasks: BackgroundTasks
) -> Response:
    """Answer URL verification and react to shared links and greetings in messages."""

    if payload.type == "url_verification":
        return JSONResponse(content={"challenge": payload.challenge or ""})

    event = payload.event
    if payload.type != "event_callback" or event is None or event.type != "message":
        return Response(status_code=status.HTTP_200_OK)

    is_user_message = isinstance(event.user, str) and isinstance(event.channel, str)
    if event.bot_id or event.subtype or not is_user_message or not event.user or not event.channel:
        logger.debug("Skipping Slack message event that was not posted by a user")
        return Response(status_code=status.HTTP_200_OK)

    text = event.text or ""
    slack_client = get_slack_client_from_request(request)

    if find_shared_link(text):
        pipeline = get_pipeline_from_request(request)
        if pipeline is None:
            logger.warning("Spotify client unavailable; skipping shared link resolution")
            return Response(status_code=status.HTTP_200_OK)
        background_tasks.add_task(run_shared_link, pipeline, slack_client, event)
    elif _GREETING_PATTERN.search(text):
        background_tasks.add_task(run_greeting, slack_client, event)

    return Response(status_code=status.HTTP_200_OK)


async def run_search_command(
    pipeline: RecommendationPipeline,
    slack_client: SlackClient,
    command: SlackSlashCommand,
    query: str,
) -> None:
    """Search the catalog and post the first page as an ephemeral result view."""

    respond = partial(slack_client.respond, command.response_url)
    try:
        blocks = await pipeline.search(query)
    except RecommenderError as exc:
        logger.exception("Catalog search failed for query: %s", query)
        await safe_respond(
            respond,
            build_error_response(
                f'I couldn\'t find any results for "{query}" because an error occurred: {exc}.'
            ),
        )
        return
    except Exception:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected failure while searching for: %s", query)
        await safe_respond(respond, build_error_response(UNEXPECTED_ERROR_MESSAGE))
        return

    await safe_respond(respond, build_results_response(blocks))


async def run_block_action(
    dispatcher: ActionDispatcher,
    slack_client: SlackClient,
    action: NavigationAction,
    user_id: str,
    response_url: str,
) -> None:
    """Dispatch one block action and report unexpected failures to the user."""

    respond = partial(slack_client.respond, response_url)
    try:
        await dispatcher.dispatch(action, user_id=user_id, respond=respond)
    except SlackAPIError:
        logger.exception("Failed to deliver Slack response for action %s", action.action_id)
    except Exception:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected failure while handling action %s", action.action_id)
        await safe_respond(respond, build_error_response(UNEXPECTED_ERROR_MESSAGE))


async def run_shared_link(
    pipeline: RecommendationPipeline,
    slack_client: SlackClient,
    event: SlackMessageEvent,
) -> None:
    """Resolve a shared Spotify link and announce it, with a YouTube match when found."""

    channel = event.channel or ""
    user = event.user or ""
    try:
        resolution = await pipeline.resolve_shared_link(event.text or "")
    except RecommenderError as exc:
        logger.exception("Shared link resolution failed")
        await safe_post_ephemeral(
            slack_client, channel, user, f"I couldn't look up that Spotify link: {exc}"
        )
        return
    except Exception:  # pragma: no cover - defensive guard for unexpected failures
        logger.exception("Unexpected failure while resolving shared link")
        await safe_post_ephemeral(slack_client, channel, user, UNEXPECTED_ERROR_MESSAGE)
        return

    try:
        await slack_client.post_message(channel, pipeline.build_link_announcement(user, resolution))
    except SlackAPIError:
        logger.exception("Failed to announce shared link in channel %s", channel)


async def run_greeting(slack_client: SlackClient, event: SlackMessageEvent) -> None:
    """Greet the user who said hello in the channel they said it in."""

    try:
        await slack_client.post_message(event.channel or "", build_greeting(event.user or ""))
    except SlackAPIError:
        logger.exception("Failed to greet user %s", event.user)


async def safe_respond(respond: Respond, payload: dict[str, Any]) -> None:
    """Deliver a response_url payload, logging instead of raising on failure."""

    try:
        await respond(payload)
    except (SlackAPIError, ValueError):
        logger.exception("Failed to deliver Slack response")


async def safe_post_ephemeral(
    slack_client: SlackClient, channel: str, user: str, text: str
) -> None:
    """Deliver an ephemeral message, logging instead of raising on failure."""

    try:
        await slack_client.post_ephemeral(channel, user, text)
    except (SlackAPIError, ValueError):
        logger.exception("Failed to deliver ephemeral Slack message to %s", user)


def get_spotify_client_from_request(request: Request) -> SpotifyClient | None:
    """Return the configured Spotify client from the FastAPI application state."""

    spotify_client = getattr(request.app.state, "spotify_client", None)
    if spotify_client is None:
        return None
    if not isinstance(spotify_client, SpotifyClient):
        type_name = type(spotify_client).__name__
        logger.warning("Unexpected spotify_client type on app state: %s", type_name)
        return None
    return spotify_client


def get_youtube_client_from_request(request: Request) -> YouTubeClient | None:
    """Return the configured YouTube client from the FastAPI application state."""

    youtube_client = getattr(request.app.state, "youtube_client", None)
    if youtube_client is None:
        return None
    if not isinstance(youtube_client, YouTubeClient):
        type_name = type(youtube_client).__name__
        logger.warning("Unexpected youtube_client type on app state: %s", type_name)
        return None
    return youtube_client


def get_slack_client_from_request(request: Request) -> SlackClient:
    """Return the configured Slack client, falling back to a token-less one."""

    slack_client = getattr(request.app.state, "slack_client", None)
    if isinstance(slack_client, SlackClient):
        return slack_client
    if slack_client is not None:
        logger.warning("Unexpected slack_client type on app state: %s", type(slack_client).__name__)
    return SlackClient()


def get_pipeline_from_request(request: Request) -> RecommendationPipeline | None:
    """Build a pipeline from the clients on app state, or ``None`` without Spotify."""

    spotify_client = get_spotify_client_from_request(request)
    if spotify_client is None:
        return None

    settings = get_settings()
    return RecommendationPipeline(
        catalog=spotify_client,
        secondary=get_youtube_client_from_request(request),
        page_size=settings.search_limit,
        candidate_limit=settings.youtube_candidate_limit,
    )
