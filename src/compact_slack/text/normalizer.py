"""Rule-based compaction of assistant status prompts."""

from __future__ import annotations

import re
from typing import Iterable

from .rules import (
    ACTION_PATTERNS,
    MAX_ACTIONS,
    NOISE_PREFIXES,
    NOISE_SUFFIXES,
    REWRITE_PIPELINE,
    ActionPattern,
    RewriteRule,
)

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def strip_prefix(text: str, prefixes: Iterable[str] = NOISE_PREFIXES) -> str:
    """Remove the first matching filler prefix, if any."""

    for prefix in prefixes:
        if text.startswith(prefix):
            return text[len(prefix) :].strip()
    return text


def strip_suffix(text: str, suffixes: Iterable[str] = NOISE_SUFFIXES) -> str:
    """Remove the first matching filler suffix, if any."""

    for suffix in suffixes:
        if suffix and text.endswith(suffix):
            return text[: -len(suffix)].strip()
    return text


def normalize(raw: str, *, rules: Iterable[RewriteRule] = REWRITE_PIPELINE) -> str:
    """Compress a free-text status prompt into its compact form.

    Whitespace is collapsed, one filler prefix and one filler suffix are
    dropped, then every rewrite rule runs in order over the text produced by
    the previous one. Rule order is significant.
    """

    text = collapse_whitespace(raw)
    text = strip_prefix(text)
    text = strip_suffix(text)
    for rule in rules:
        text = rule.apply(text)
    return collapse_whitespace(text)


def extract_actions(
    raw: str,
    *,
    patterns: Iterable[ActionPattern] = ACTION_PATTERNS,
    limit: int = MAX_ACTIONS,
) -> list[str]:
    """Return up to ``limit`` action phrases found in the raw text.

    Results are grouped by pattern family, then by position. Phrases matched
    by more than one family are kept each time.
    """

    actions: list[str] = []
    for action in patterns:
        for match in action.pattern.finditer(raw):
            phrase = match.group(1).strip()
            if phrase:
                actions.append(phrase)
    return actions[:limit]


def summarize(raw: str) -> str:
    formatted = normalize(raw)
    actions = extract_actions(raw)
    if actions:
        return f"{formatted} | Actions: {', '.join(actions)}"
    return formatted


__all__ = [
    "collapse_whitespace",
    "extract_actions",
    "normalize",
    "strip_prefix",
    "strip_suffix",
    "summarize",
]
