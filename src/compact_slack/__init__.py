"""Compact Slack notifications for coding assistant sessions."""

__version__ = "0.3.0"

__all__ = ["__version__"]
