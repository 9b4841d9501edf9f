"""Slack webhook payload models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field


class TextObject(BaseModel):
    type: Literal["plain_text", "mrkdwn"] = "mrkdwn"
    text: str


class Block(BaseModel):
    """A single layout block (header or section)."""

    type: Literal["header", "section"]
    text: TextObject | None = None
    fields: list[TextObject] | None = None


class ChatMessage(BaseModel):
    """Payload for one webhook POST."""

    text: str = Field(..., description="Plain text body, also used for notification previews.")
    blocks: list[Block] | None = Field(
        default=None,
        description="Optional rich layout rendered in place of the text body.",
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True, slots=True)
class CompactPromptData:
    prompt: str
    timestamp: str
    session_id: str | None = None


__all__ = ["Block", "ChatMessage", "CompactPromptData", "TextObject"]
