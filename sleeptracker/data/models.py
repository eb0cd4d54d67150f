"""
Data models for TrackMySleep.

Plain dataclasses that represent database rows, so services and the console
front-end never handle raw sqlite rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

QUALITY_UNSET = -1
QUALITY_MIN = 0
QUALITY_MAX = 5

QUALITY_LABELS = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent",
}


@dataclass
class SleepNight:
    """
    One tracked night, from 'Start' to 'Stop'.

    end_time equals start_time while the night is still being tracked.
    sleep_quality stays QUALITY_UNSET until the night is rated.
    """
    night_id: Optional[int] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    sleep_quality: int = QUALITY_UNSET

    def __post_init__(self) -> None:
        if self.end_time is None:
            self.end_time = self.start_time

    @property
    def in_progress(self) -> bool:
        return self.end_time == self.start_time

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def rated(self) -> bool:
        return self.sleep_quality != QUALITY_UNSET

    @property
    def quality_label(self) -> str:
        return QUALITY_LABELS.get(self.sleep_quality, "--")


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   Defines the one entity of the app, SleepNight, plus the rating scale.
#
# Key points:
#   - A night is "in progress" exactly when end_time == start_time. There is
#     no separate status column; the stop action is what makes them differ.
#   - Ratings run 0..5 with a human label each. -1 means "not rated yet".
#
# Data flow:
#   SleepTrackerService creates a SleepNight → Repository.insert() stores it
#   → stop sets end_time → SleepQualityService sets sleep_quality.
