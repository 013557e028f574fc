from __future__ import annotations

from datetime import datetime


def format_elapsed(total_seconds: int) -> str:
    """Render a duration as ``Ns``, ``Mm Ss`` or ``Hh Mm`` (truncated, never rounded)."""
    seconds = max(int(total_seconds), 0)
    minutes = seconds // 60
    if seconds < 60:
        return f"{seconds}s"
    if minutes < 60:
        return f"{minutes}m {seconds % 60}s"
    return f"{minutes // 60}h {minutes % 60}m"


def elapsed_since(start: datetime | None, now: datetime) -> str:
    if start is None:
        return "0s"
    return format_elapsed(int((now - start).total_seconds()))
