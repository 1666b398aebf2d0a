"""Formatting helpers for the quiz clock."""

from __future__ import annotations


def format_elapsed(seconds: int) -> str:
    """Format a duration as ``M:SS``, e.g. ``75 -> "1:15"``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"
