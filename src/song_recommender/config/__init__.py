"""Configuration helpers for the Song Recommender bot."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
