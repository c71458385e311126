"""
Adapter: Slack incoming-webhook channel.

Implements the NotificationChannel port by POSTing a Block Kit payload
with httpx. The outbound call is bounded by ``timeout``.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from errorhub.domain.reporting.ports import NotificationChannel

logger = logging.getLogger(__name__)

MAX_SECTION_TEXT = 3000


def _section(text: str) -> dict[str, Any]:
    if len(text) > MAX_SECTION_TEXT:
        text = text[: MAX_SECTION_TEXT - 30] + "...\n```"
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


class SlackWebhookChannel(NotificationChannel):
    """Posts notifications to a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str,
        username: str = "Error Bot",
        icon_emoji: str = ":warning:",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        parsed = urlparse(webhook_url)
        if parsed.scheme not in ("http", "https"):
            msg = f"Invalid webhook URL scheme: {parsed.scheme}"
            raise ValueError(msg)
        self._webhook_url = webhook_url
        self._username = username
        self._icon_emoji = icon_emoji
        self._timeout = timeout
        self._client = client

    def build_payload(self, destination: str, subject: str, body: str) -> dict[str, Any]:
        blocks = [_section(f"*{subject}*")]
        blocks.extend(_section(chunk) for chunk in body.split("\n\n") if chunk.strip())
        blocks.append({"type": "divider"})
        return {
            "channel": destination,
            "username": self._username,
            "icon_emoji": self._icon_emoji,
            "text": subject,
            "blocks": blocks,
        }

    def send(self, destination: str, subject: str, body: str) -> None:
        payload = self.build_payload(destination, subject, body)
        if self._client is not None:
            response = self._client.post(self._webhook_url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        else:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(self._webhook_url, json=payload)
                response.raise_for_status()
        logger.info("Slack notification posted to %s", destination)
