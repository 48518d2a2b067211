"""HTTP routers for the Song Recommender bot."""

from .slack import router as slack_router

__all__ = ["slack_router"]
