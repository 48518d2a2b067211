from song_recommender.schemas import (
    ActionButton,
    ActionRowBlock,
    ContextBlock,
    DividerBlock,
    SectionBlock,
)
from song_recommender.services import (
    build_error_response,
    build_results_response,
    build_selection_response,
    render_blocks,
)


def test_render_blocks_produces_block_kit_json() -> None:
    blocks = [
        DividerBlock(),
        SectionBlock(text="*hi*", image_url="https://img/1", image_alt="alt"),
        ContextBlock(text="3m 45s"),
        ActionRowBlock(
            buttons=(
                ActionButton(
                    label="Next 5 >",
                    opaque_value="https://api.spotify.com/v1/search?offset=5",
                    action_id="next_results",
                ),
            )
        ),
    ]

    rendered = render_blocks(blocks)

    assert rendered == [
        {"type": "divider"},
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": "*hi*"},
            "accessory": {"type": "image", "image_url": "https://img/1", "alt_text": "alt"},
        },
        {
            "type": "context",
            "elements": [{"type": "plain_text", "text": "3m 45s", "emoji": True}],
        },
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "Next 5 >", "emoji": True},
                    "value": "https://api.spotify.com/v1/search?offset=5",
                    "action_id": "next_results",
                    "style": "primary",
                }
            ],
        },
    ]


def test_section_without_image_has_no_accessory() -> None:
    (rendered,) = render_blocks([SectionBlock(text="plain")])

    assert "accessory" not in rendered


def test_results_response_replaces_original() -> None:
    response = build_results_response([DividerBlock()])

    assert response == {
        "response_type": "ephemeral",
        "blocks": [{"type": "divider"}],
        "replace_original": True,
        "delete_original": True,
    }


def test_selection_response_is_public_and_terminal() -> None:
    response = build_selection_response("U123", "https://open.spotify.com/track/abc")

    assert response["response_type"] == "in_channel"
    assert response["text"] == "<@U123> recommends: https://open.spotify.com/track/abc"
    assert response["replace_original"] is True
    assert response["delete_original"] is True


def test_error_response_keeps_original() -> None:
    response = build_error_response("boom")

    assert response == {"response_type": "ephemeral", "text": "boom", "replace_original": False}
