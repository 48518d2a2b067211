"""Slack bot that searches Spotify and resolves shared links to YouTube."""

__version__ = "0.1.0"
