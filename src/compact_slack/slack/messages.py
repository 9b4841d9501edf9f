"""Builders that turn prompts and progress snapshots into chat messages."""

from __future__ import annotations

import math

from ..progress.models import ProgressSnapshot
from .models import Block, ChatMessage, CompactPromptData, TextObject

MAX_MESSAGE_LENGTH = 4000
PROGRESS_BAR_WIDTH = 20
PROGRESS_TITLE = "📊 Task Progress Update"
PROGRESS_PREVIEW = "Task Progress Update"
SESSION_PLACEHOLDER = "N/A"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def split_by_length(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Cut ``text`` into consecutive slices of ``limit`` characters.

    Slices ignore word and line boundaries. Empty text yields one empty slice.
    """

    if limit <= 0:
        raise ValueError("limit must be positive")
    if not text:
        return [""]
    return [text[start : start + limit] for start in range(0, len(text), limit)]


def build_prompt_messages(data: CompactPromptData, limit: int = MAX_MESSAGE_LENGTH) -> list[ChatMessage]:
    if len(data.prompt) <= limit:
        return [ChatMessage(text=data.prompt)]
    chunks = split_by_length(data.prompt, limit)
    total = len(chunks)
    return [ChatMessage(text=f"({index}/{total}) {chunk}") for index, chunk in enumerate(chunks, start=1)]


def progress_rate(snapshot: ProgressSnapshot) -> int:
    if snapshot.total_tasks <= 0:
        return 0
    return round_half_up(snapshot.completed_count / snapshot.total_tasks * 100)


def progress_bar(rate: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    filled = min(max(round_half_up(rate / 100 * width), 0), width)
    return f"{'█' * filled}{'░' * (width - filled)} {rate}%"


def build_progress_message(snapshot: ProgressSnapshot) -> ChatMessage:
    rate = progress_rate(snapshot)
    blocks = [
        Block(type="header", text=TextObject(type="plain_text", text=PROGRESS_TITLE)),
        Block(
            type="section",
            fields=[
                TextObject(text=f"*Current Task:* {snapshot.current_task}"),
                TextObject(text=f"*Progress:* {snapshot.completed_count}/{snapshot.total_tasks} ({rate}%)"),
                TextObject(text=f"*Time:* {snapshot.timestamp}"),
                TextObject(text=f"*Session:* {snapshot.session_id or SESSION_PLACEHOLDER}"),
            ],
        ),
        Block(type="section", text=TextObject(text=progress_bar(rate))),
    ]
    if snapshot.completed_tasks:
        listing = "\n".join(f"• {name}" for name in snapshot.completed_tasks)
        blocks.append(Block(type="section", text=TextObject(text=f"*Completed Tasks:*\n{listing}")))
    return ChatMessage(text=PROGRESS_PREVIEW, blocks=blocks)


__all__ = [
    "MAX_MESSAGE_LENGTH",
    "build_progress_message",
    "build_prompt_messages",
    "progress_bar",
    "progress_rate",
    "round_half_up",
    "split_by_length",
]
