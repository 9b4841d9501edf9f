"""Ordered rule tables used by the prompt normalizer."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """A global regex substitution applied as one pipeline step."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


@dataclass(frozen=True, slots=True)
class ActionPattern:
    """An action-verb family whose first group captures the object phrase."""

    family: str
    pattern: re.Pattern[str]


# A period only ends a phrase when it ends a sentence, so "config.json" stays whole.
_END = r"(?:\.(?=\s|$)|$)"
_LEAD = r"\b(?:(?:Let me|I'll|I will) )?"

NOISE_PREFIXES: tuple[str, ...] = (
    "As an AI assistant,",
    "I understand that",
    "Based on your request,",
    "To help you with",
    "I'll help you",
    "Let me assist you",
)

NOISE_SUFFIXES: tuple[str, ...] = (
    "Please let me know if you need any clarification.",
    "Let me know if you have any questions.",
    "Feel free to ask if you need help.",
)

TOOL_RULES: tuple[RewriteRule, ...] = (
    RewriteRule(
        "tool_usage",
        re.compile(rf"\bI(?:'ll| will) use the (\w+) tool to (.+?){_END}"),
        r"Using \1: \2",
    ),
)

FILE_RULES: tuple[RewriteRule, ...] = (
    RewriteRule(
        "read_file",
        re.compile(rf"{_LEAD}(?:read|check|examine) (?:the )?(?:file|contents of) (.+?){_END}"),
        r"Reading \1",
    ),
    RewriteRule(
        "create_file",
        re.compile(rf"{_LEAD}(?:create|write) (?:a )?(?:new )?(?:file )?(.+?){_END}"),
        r"Creating \1",
    ),
    RewriteRule(
        "edit_file",
        re.compile(rf"{_LEAD}(?:edit|modify|update) (?:the )?(?:file )?(.+?){_END}"),
        r"Editing \1",
    ),
)

ACTION_RULES: tuple[RewriteRule, ...] = (
    RewriteRule(
        "run_command",
        re.compile(rf"{_LEAD}(?:run|execute) (?:the )?(.+?){_END}"),
        r"Running \1",
    ),
    RewriteRule(
        "search",
        re.compile(rf"{_LEAD}(?:search|look) for (.+?){_END}"),
        r"Searching \1",
    ),
    RewriteRule(
        "implement",
        re.compile(rf"{_LEAD}(?:implement|add) (.+?){_END}"),
        r"Implementing \1",
    ),
)

_CONNECTIVE = r"(?:let me|I'll|I will) "

FILLER_RULES: tuple[RewriteRule, ...] = tuple(
    RewriteRule(
        f"{word.lower()}_filler",
        re.compile(rf"\b{word},? {_CONNECTIVE}", re.IGNORECASE),
        "",
    )
    for word in ("First", "Now", "Next")
) + (RewriteRule("bare_filler", re.compile(rf"\b{_CONNECTIVE}", re.IGNORECASE), ""),)

REWRITE_PIPELINE: tuple[RewriteRule, ...] = TOOL_RULES + FILE_RULES + ACTION_RULES + FILLER_RULES

_ACTION_END = r"(?:,|\.(?=\s|$)|$)"
_ACTION_FLAGS = re.IGNORECASE

ACTION_PATTERNS: tuple[ActionPattern, ...] = (
    ActionPattern("create", re.compile(rf"\b(?:create|implement|add|build) (.+?){_ACTION_END}", _ACTION_FLAGS)),
    ActionPattern("edit", re.compile(rf"\b(?:edit|modify|update|change) (.+?){_ACTION_END}", _ACTION_FLAGS)),
    ActionPattern("run", re.compile(rf"\b(?:run|execute) (.+?){_ACTION_END}", _ACTION_FLAGS)),
    ActionPattern("search", re.compile(rf"\b(?:search|find|look for) (.+?){_ACTION_END}", _ACTION_FLAGS)),
    ActionPattern("read", re.compile(rf"\b(?:read|check|examine) (.+?){_ACTION_END}", _ACTION_FLAGS)),
)

MAX_ACTIONS = 5


__all__ = [
    "ACTION_PATTERNS",
    "ACTION_RULES",
    "ActionPattern",
    "FILE_RULES",
    "FILLER_RULES",
    "MAX_ACTIONS",
    "NOISE_PREFIXES",
    "NOISE_SUFFIXES",
    "REWRITE_PIPELINE",
    "RewriteRule",
    "TOOL_RULES",
]
