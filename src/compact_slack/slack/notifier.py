"""Async delivery of chat messages to a Slack incoming webhook."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Awaitable, Callable
from urllib.parse import urlsplit

import httpx

from ..progress.models import ProgressSnapshot
from .messages import build_progress_message, build_prompt_messages
from .models import ChatMessage, CompactPromptData

logger = logging.getLogger(__name__)

CHUNK_DELAY_SECONDS = 0.5


class NotificationError(RuntimeError):
    """Base class for notification failures."""


class ConfigurationError(NotificationError):
    """Raised when a send is attempted without a webhook URL."""


class DeliveryError(NotificationError):
    """Raised when the webhook POST fails or returns a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def mask_webhook_url(url: str) -> str:
    """Return ``scheme://host/…`` so secrets in the webhook path stay out of logs."""

    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid webhook url>"
    if not parts.scheme or not parts.netloc:
        return "<invalid webhook url>"
    return f"{parts.scheme}://{parts.netloc}/…"


class SlackNotifier:
    """Posts chat messages to one webhook, chunking long prompts."""

    def __init__(
        self,
        webhook_url: str | None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not webhook_url:
            raise ConfigurationError(
                "Slack webhook URL is not configured. Set SLACK_WEBHOOK_URL or call configure first."
            )
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._transport = transport
        self._sleep = sleep

    @property
    def webhook_url(self) -> str:
        return self._webhook_url

    async def send_message(self, message: ChatMessage) -> None:
        payload = message.to_payload()
        target = mask_webhook_url(self._webhook_url)
        logger.debug(
            "Sending Slack message",
            extra={"target": target, "payload": json.dumps(payload, ensure_ascii=False)},
        )
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Slack webhook request failed", extra={"target": target, "error": str(exc)})
            raise DeliveryError(f"Slack webhook request failed: {exc}") from exc

        logger.debug(
            "Slack webhook responded",
            extra={"target": target, "status_code": response.status_code},
        )
        if not response.is_success:
            body = response.text[:200]
            logger.error(
                "Slack webhook rejected message",
                extra={"target": target, "status_code": response.status_code, "body": body},
            )
            raise DeliveryError(
                f"HTTP {response.status_code} {response.reason_phrase}: {body}",
                status_code=response.status_code,
                body=body,
            )

    async def send_compact_prompt(self, data: CompactPromptData) -> int:
        """Deliver a prompt, split into numbered chunks when it is too long.

        Chunks go out strictly in order with a pause between them. The first
        failure aborts the remaining chunks. Returns the number of messages sent.
        """

        messages = build_prompt_messages(data)
        for index, message in enumerate(messages):
            if index:
                await self._sleep(CHUNK_DELAY_SECONDS)
            await self.send_message(message)
        if len(messages) > 1:
            logger.info(
                "Sent chunked prompt",
                extra={"chunks": len(messages), "session_id": data.session_id},
            )
        return len(messages)

    async def send_progress(self, snapshot: ProgressSnapshot) -> None:
        await self.send_message(build_progress_message(snapshot))


__all__ = [
    "CHUNK_DELAY_SECONDS",
    "ConfigurationError",
    "DeliveryError",
    "NotificationError",
    "SlackNotifier",
    "mask_webhook_url",
]
