from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from song_recommender.api import slack_router
from song_recommender.clients import build_slack_client, build_spotify_client, build_youtube_client
from song_recommender.config.settings import AppSettings, get_settings
from song_recommender.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""

    logger.info("Song Recommender service is starting up")
    settings = get_settings()
    validate_critical_settings(settings)

    app.state.slack_client = build_slack_client(settings)

    if settings.spotify_client_id and settings.spotify_client_secret:
        app.state.spotify_client = build_spotify_client(settings)
        logger.info("Spotify client initialized successfully")
    else:
        app.state.spotify_client = None
        logger.info("Spotify client not initialized due to missing credentials")

    if settings.youtube_api_key:
        app.state.youtube_client = build_youtube_client(settings)
        logger.info("YouTube client initialized; shared links will be matched on YouTube")
    else:
        app.state.youtube_client = None
        logger.info("YouTube client not initialized; cross-platform matching disabled")

    try:
        yield
    finally:
        app.state.spotify_client = None
        app.state.youtube_client = None
        app.state.slack_client = None
        logger.info("Song Recommender service is shutting down")


app = FastAPI(title="Song Recommender Bot", version="0.1.0", lifespan=lifespan)
app.include_router(slack_router)


@app.get("/health", summary="Health check")
async def health_check() -> JSONResponse:
    """Simple endpoint to verify the service is running."""

    return JSONResponse(content={"status": "ok"})


def validate_critical_settings(settings: AppSettings) -> None:
    """Ensure critical settings are present and non-empty."""

    missing: list[str] = []
    if not settings.slack_bot_token:
        missing.append("SLACK_BOT_TOKEN")
    if not settings.spotify_client_id:
        missing.append("SPOTIFY_CLIENT_ID")
    if not settings.spotify_client_secret:
        missing.append("SPOTIFY_CLIENT_SECRET")

    if missing:
        logger.warning(
            "Missing recommended environment variables: %s", ", ".join(missing)
        )
    else:
        logger.info("All critical environment variables are present")
