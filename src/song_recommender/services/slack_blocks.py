"""Render UI blocks as Slack Block Kit JSON and build ``response_url`` payloads."""

from __future__ import annotations

from typing import Any, Sequence

from song_recommender.schemas import (
    ActionButton,
    ActionRowBlock,
    ContextBlock,
    DividerBlock,
    SectionBlock,
    UIBlock,
)


def render_button(button: ActionButton) -> dict[str, Any]:
    """Return the Block Kit button element for ``button``."""

    rendered: dict[str, Any] = {
        "type": "button",
        "text": {"type": "plain_text", "text": button.label, "emoji": True},
        "value": button.opaque_value,
        "action_id": button.action_id,
    }
    if button.style_hint:
        rendered["style"] = button.style_hint
    return rendered


def render_block(block: UIBlock) -> dict[str, Any]:
    """Return the Block Kit representation of a single block."""

    if isinstance(block, DividerBlock):
        return {"type": "divider"}

    if isinstance(block, SectionBlock):
        rendered: dict[str, Any] = {
            "type": "section",
            "text": {"type": "mrkdwn", "text": block.text},
        }
        if block.image_url:
            rendered["accessory"] = {
                "type": "image",
                "image_url": block.image_url,
                "alt_text": block.image_alt or "thumbnail",
            }
        return rendered

    if isinstance(block, ContextBlock):
        return {
            "type": "context",
            "elements": [{"type": "plain_text", "text": block.text, "emoji": True}],
        }

    if isinstance(block, ActionRowBlock):
        return {
            "type": "actions",
            "elements": [render_button(button) for button in block.buttons],
        }

    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def render_blocks(blocks: Sequence[UIBlock]) -> list[dict[str, Any]]:
    """Render blocks in order."""

    return [render_block(block) for block in blocks]


def build_results_response(blocks: Sequence[UIBlock]) -> dict[str, Any]:
    """Ephemeral result view replacing the message the interaction came from."""

    return {
        "response_type": "ephemeral",
        "blocks": render_blocks(blocks),
        "replace_original": True,
        "delete_original": True,
    }


def build_selection_response(user_id: str, track_url: str) -> dict[str, Any]:
    """Public recommendation that replaces and deletes the ephemeral result view."""

    return {
        "response_type": "in_channel",
        "text": f"<@{user_id}> recommends: {track_url}",
        "replace_original": True,
        "delete_original": True,
    }


def build_error_response(text: str) -> dict[str, Any]:
    """Ephemeral error that leaves the original message untouched."""

    return {
        "response_type": "ephemeral",
        "text": text,
        "replace_original": False,
    }
