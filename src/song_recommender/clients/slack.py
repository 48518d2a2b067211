"""Async client for replying to Slack interactions and posting messages."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, cast

import httpx

from song_recommender.config.settings import AppSettings


class SlackAPIError(RuntimeError):
    """Raised when a Slack Web API or response_url request fails."""


@dataclass(slots=True)
class SlackClient:
    """Minimal Slack client covering ``response_url`` replies and chat messages."""

    bot_token: str = ""
    base_url: str = "https://slack.com/api"

    async def respond(
        self,
        response_url: str,
        payload: dict[str, Any],
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> None:
        """Post a message payload to an interaction's ``response_url``.

        Parameters
        ----------
        response_url:
            URL Slack attached to the slash command or block action.
        payload:
            Message body, including ``replace_original``/``delete_original`` flags.
        http_client:
            Optional existing :class:`httpx.AsyncClient` to reuse. When ``None``, a temporary
            client is created.
        timeout:
            Timeout, in seconds, for the Slack HTTP request.
        """

        if not response_url:
            raise ValueError("A response_url is required to respond to a Slack interaction")

        async def _post(client: httpx.AsyncClient) -> None:
            try:
                response = await client.post(response_url, json=payload)
            except httpx.HTTPError as exc:
                raise SlackAPIError(f"Slack response_url request failed: {exc}") from exc

            if response.status_code != HTTPStatus.OK:
                raise SlackAPIError(
                    "Slack response_url request failed: "
                    f"status={response.status_code}, body={response.text}"
                )

        if http_client is not None:
            return await _post(http_client)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await _post(client)

    async def post_message(
        self,
        channel: str,
        text: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> dict[str, Any]:
        """Send a plain message to a channel and return the Slack response."""

        if not text.strip():
            raise ValueError("Slack messages must contain non-empty text")

        return await self._call(
            "chat.postMessage",
            {"channel": channel, "text": text},
            http_client=http_client,
            timeout=timeout,
        )

    async def post_ephemeral(
        self,
        channel: str,
        user: str,
        text: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 10.0,
    ) -> dict[str, Any]:
        """Send a message only ``user`` can see and return the Slack response."""

        if not text.strip():
            raise ValueError("Slack messages must contain non-empty text")

        return await self._call(
            "chat.postEphemeral",
            {"channel": channel, "user": user, "text": text},
            http_client=http_client,
            timeout=timeout,
        )

    async def _call(
        self,
        method: str,
        payload: dict[str, Any],
        *,
        http_client: Optional[httpx.AsyncClient],
        timeout: Optional[float],
    ) -> dict[str, Any]:
        if not self.bot_token:
            raise SlackAPIError(f"Slack {method} requires a bot token")

        url = f"{self.base_url}/{method}"
        headers = {"Authorization": f"Bearer {self.bot_token}"}

        async def _post(client: httpx.AsyncClient) -> dict[str, Any]:
            try:
                response = await client.post(url, json=payload, headers=headers)
            except httpx.HTTPError as exc:
                raise SlackAPIError(f"Slack {method} request failed: {exc}") from exc

            if response.status_code != HTTPStatus.OK:
                raise SlackAPIError(
                    f"Slack {method} request failed: "
                    f"status={response.status_code}, body={response.text}"
                )

            try:
                payload_raw = response.json()
            except ValueError as exc:
                raise SlackAPIError(f"Slack {method} response was not valid JSON") from exc

            if not isinstance(payload_raw, dict):
                raise SlackAPIError(f"Slack {method} response had unexpected structure")

            payload_obj = cast(dict[str, Any], payload_raw)

            if not bool(payload_obj.get("ok", False)):
                error = str(payload_obj.get("error", "Unknown error"))
                raise SlackAPIError(f"Slack {method} failed: {error}")

            return payload_obj

        if http_client is not None:
            return await _post(http_client)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await _post(client)


def build_slack_client(settings: AppSettings) -> SlackClient:
    """Create a SlackClient from application settings; the token may be absent."""

    return SlackClient(bot_token=settings.slack_bot_token or "")
