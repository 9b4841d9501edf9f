"""Slack message building and webhook delivery."""

from .messages import (
    MAX_MESSAGE_LENGTH,
    build_progress_message,
    build_prompt_messages,
    progress_bar,
    split_by_length,
)
from .models import Block, ChatMessage, CompactPromptData, TextObject
from .notifier import (
    ConfigurationError,
    DeliveryError,
    NotificationError,
    SlackNotifier,
    mask_webhook_url,
)

__all__ = [
    "Block",
    "ChatMessage",
    "CompactPromptData",
    "ConfigurationError",
    "DeliveryError",
    "MAX_MESSAGE_LENGTH",
    "NotificationError",
    "SlackNotifier",
    "TextObject",
    "build_progress_message",
    "build_prompt_messages",
    "mask_webhook_url",
    "progress_bar",
    "split_by_length",
]
