"""Exception types raised by the TrackMySleep data and service layers."""

from __future__ import annotations

from typing import Optional


class SleepTrackerError(Exception):
    """Base class for every error this package raises on purpose."""


class StoreError(SleepTrackerError):
    """The SQLite store failed to execute an operation."""

    def __init__(self, action: str, message: Optional[str] = None) -> None:
        self.action = action
        super().__init__(message or f"Sleep store failed to {action}.")


class NightNotFoundError(SleepTrackerError):
    """No night exists with the requested identifier."""

    def __init__(self, night_id: Optional[int]) -> None:
        self.night_id = night_id
        super().__init__(f"No sleep night with id {night_id}.")


class InvalidQualityError(SleepTrackerError, ValueError):
    """A quality rating outside the 0..5 scale was submitted."""

    def __init__(self, quality: int) -> None:
        self.quality = quality
        super().__init__(f"Sleep quality must be between 0 and 5, got {quality}.")
