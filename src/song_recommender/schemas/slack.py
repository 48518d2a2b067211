"""Pydantic models representing inbound Slack payloads."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class SlackSlashCommand(BaseModel):
    """Subset of slash command form fields used by the bot."""

    model_config = ConfigDict(extra="ignore")

    command: str
    text: str = ""
    user_id: str
    channel_id: Optional[str] = None
    response_url: str


class SlackUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    username: Optional[str] = None


class SlackBlockAction(BaseModel):
    """A single button click inside a ``block_actions`` payload."""

    model_config = ConfigDict(extra="ignore")

    action_id: str
    value: Optional[str] = None


class SlackBlockActionsPayload(BaseModel):
    """Interactivity payload delivered when a user clicks a block button."""

    model_config = ConfigDict(extra="ignore")

    type: str
    user: SlackUser
    actions: list[SlackBlockAction] = []
    response_url: Optional[str] = None


class SlackMessageEvent(BaseModel):
    """Inner Events API event, with the ``message`` fields needed for link handling.

    ``user`` and ``channel`` are strings on messages but objects on events such
    as ``team_join`` or ``channel_created``, so they are only narrowed once
    the event type is known.
    """

    model_config = ConfigDict(extra="ignore")

    type: str
    text: Optional[str] = None
    user: Any = None
    channel: Any = None
    subtype: Optional[str] = None
    bot_id: Optional[str] = None


class SlackEventEnvelope(BaseModel):
    """Top-level Events API request, including URL verification handshakes."""

    model_config = ConfigDict(extra="ignore")

    type: str
    challenge: Optional[str] = None
    event: Optional[SlackMessageEvent] = None
