"""
Sleep Quality Service — state holder for the rating screen.

Loads one night by id, stores the rating the user picked and tells the
front-end to go back to the tracking screen.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from sleeptracker.data.models import QUALITY_MAX, QUALITY_MIN
from sleeptracker.data.repository import Repository
from sleeptracker.errors import InvalidQualityError
from sleeptracker.services.events import PendingEvent
from sleeptracker.services.scope import TaskScope

logger = logging.getLogger(__name__)


class SleepQualityService(QObject):
    """Rates the night identified by `sleep_night_key`."""

    error_occurred = Signal(object)

    def __init__(
        self,
        repo: Repository,
        sleep_night_key: int,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.repo = repo
        self.sleep_night_key = sleep_night_key
        self.scope = TaskScope("sleep-quality", on_error=self.error_occurred.emit)
        self.navigate_to_sleep_tracker = PendingEvent("navigate_to_sleep_tracker", self)

    def set_quality(self, quality: int) -> asyncio.Task:
        return self.scope.launch(self._set_quality(quality))

    def navigation_done(self) -> None:
        self.navigate_to_sleep_tracker.reset()

    async def join(self) -> None:
        await self.scope.join()

    async def close(self) -> None:
        await self.scope.close()

    async def _set_quality(self, quality: int) -> None:
        if not QUALITY_MIN <= quality <= QUALITY_MAX:
            raise InvalidQualityError(quality)
        tonight = await self.repo.get(self.sleep_night_key)
        tonight.sleep_quality = quality
        await self.repo.update(tonight)
        logger.info("Night %d rated %d", self.sleep_night_key, quality)
        self.navigate_to_sleep_tracker.fire(True)
