"""Plain-text rendering of the sleep history list."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List

from sleeptracker.data.models import SleepNight

TITLE = "HERE IS YOUR SLEEP DATA"
DATE_FORMAT = "%A %b-%d-%Y Time: %H:%M"


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(DATE_FORMAT)


def format_duration(delta: timedelta) -> str:
    """H:MM:SS, hours unbounded."""
    total = int(delta.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_nights(nights: List[SleepNight]) -> str:
    """
    Render nights (newest first, as the repository returns them).

    A night still in progress only shows its start; end, quality and hours
    slept appear once it has been stopped.
    """
    lines = [TITLE]
    for night in nights:
        lines.append("")
        lines.append(f"Start:\t{format_timestamp(night.start_time)}")
        if night.in_progress:
            continue
        lines.append(f"End:\t{format_timestamp(night.end_time)}")
        lines.append(f"Quality:\t{night.quality_label}")
        lines.append(f"Hours:Minutes:Seconds\t{format_duration(night.duration)}")
    return "\n".join(lines)
