from __future__ import annotations

from datetime import datetime


def format_clock(moment: datetime | None) -> str | None:
    """Wall-clock ``HH:MM:SS`` in the server's local timezone."""
    if moment is None:
        return None
    return moment.astimezone().strftime("%H:%M:%S")
