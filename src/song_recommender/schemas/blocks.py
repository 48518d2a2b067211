"""Platform-agnostic UI blocks and the navigation actions they emit."""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SONG_SELECT_ACTION = "song_select_button"
NEXT_RESULTS_ACTION = "next_results"
PREVIOUS_RESULTS_ACTION = "previous_results"

ActionId = Literal["song_select_button", "next_results", "previous_results"]


class SectionBlock(BaseModel):
    """Block of mrkdwn text with an optional image accessory."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["section"] = "section"
    text: str
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


class DividerBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["divider"] = "divider"


class ContextBlock(BaseModel):
    """Small secondary line of plain text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["context"] = "context"
    text: str


class ActionButton(BaseModel):
    """Interactive button; ``opaque_value`` is echoed back when it is clicked."""

    model_config = ConfigDict(frozen=True)

    label: str
    opaque_value: str
    action_id: ActionId
    style_hint: Optional[str] = "primary"


class ActionRowBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["actions"] = "actions"
    buttons: tuple[ActionButton, ...]


UIBlock = Annotated[
    Union[SectionBlock, DividerBlock, ContextBlock, ActionRowBlock],
    Field(discriminator="kind"),
]


class NavigationAction(BaseModel):
    """Action emitted when a user clicks a rendered button."""

    model_config = ConfigDict(frozen=True)

    action_id: ActionId
    opaque_value: str
