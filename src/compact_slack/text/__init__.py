"""Prompt normalization and action extraction."""

from .normalizer import extract_actions, normalize, summarize
from .rules import ActionPattern, RewriteRule

__all__ = [
    "ActionPattern",
    "RewriteRule",
    "extract_actions",
    "normalize",
    "summarize",
]
