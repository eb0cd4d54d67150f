"""
Sleep Tracker Service — state holder for the tracking screen.

Handles: start tracking a night, stop it, clear the history, and publishes
the current night, the history and the Start/Stop/Clear availability to
whichever front-end is listening.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from sleeptracker.data.models import SleepNight
from sleeptracker.data.repository import Repository
from sleeptracker.services.events import PendingEvent
from sleeptracker.services.history import format_nights
from sleeptracker.services.scope import TaskScope

logger = logging.getLogger(__name__)


class SleepTrackerService(QObject):
    """
    Owns "tonight", the night currently being tracked.

    Only ONE night may be in progress at a time:
        no night → start → tonight in progress → stop → rate (other screen)

    Every action returns the asyncio.Task doing the store work; the caller
    may await it but never has to.
    """

    tonight_changed = Signal(object)       # SleepNight or None
    nights_changed = Signal(object)        # List[SleepNight], newest first
    nights_text_changed = Signal(str)
    start_enabled_changed = Signal(object) # bool
    stop_enabled_changed = Signal(object)  # bool
    clear_enabled_changed = Signal(object) # bool
    error_occurred = Signal(object)        # the exception

    def __init__(
        self,
        repo: Repository,
        clock: Callable[[], datetime] = datetime.now,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.repo = repo
        self.clock = clock
        self.scope = TaskScope("sleep-tracker", on_error=self.error_occurred.emit)

        # One-shot events; carry the night id / True until acknowledged
        self.navigate_to_sleep_quality = PendingEvent("navigate_to_sleep_quality", self)
        self.show_snackbar_event = PendingEvent("show_snackbar", self)

        self._tonight: Optional[SleepNight] = None
        self._start_task: Optional[asyncio.Task] = None
        self._nights: List[SleepNight] = []
        self._nights_text = format_nights([])
        self._flags: Dict[str, bool] = self._compute_flags()

    # ── Observable state ────────────────────────────────────────────────────

    @property
    def tonight(self) -> Optional[SleepNight]:
        return self._tonight

    @property
    def nights(self) -> List[SleepNight]:
        return list(self._nights)

    @property
    def nights_text(self) -> str:
        return self._nights_text

    @property
    def start_enabled(self) -> bool:
        return self._flags["start"]

    @property
    def stop_enabled(self) -> bool:
        return self._flags["stop"]

    @property
    def clear_enabled(self) -> bool:
        return self._flags["clear"]

    # ── Lifecycle ───────────────────────────────────────────────────────────

    def initialize(self) -> asyncio.Task:
        """Load tonight and the history from the store."""
        return self.scope.launch(self._initialize())

    async def join(self) -> None:
        await self.scope.join()

    async def close(self) -> None:
        await self.scope.close()

    # ── Actions ─────────────────────────────────────────────────────────────

    def start_tracking(self) -> asyncio.Task:
        # a start still inserting counts as the current night
        if self._start_task is not None and not self._start_task.done():
            logger.warning("A start is already in flight; start ignored.")
            return self._start_task
        self._start_task = self.scope.launch(self._start_tracking())
        return self._start_task

    def stop_tracking(self) -> asyncio.Task:
        return self.scope.launch(self._stop_tracking())

    def clear(self) -> asyncio.Task:
        return self.scope.launch(self._clear())

    def navigation_done(self) -> None:
        self.navigate_to_sleep_quality.reset()

    def snackbar_done(self) -> None:
        self.show_snackbar_event.reset()

    # ── Coroutines ──────────────────────────────────────────────────────────

    async def _initialize(self) -> None:
        self._set_tonight(await self._get_tonight_from_database())
        await self._refresh_nights()

    async def _get_tonight_from_database(self) -> Optional[SleepNight]:
        """Latest night if it is still running, otherwise None."""
        night = await self.repo.get_tonight()
        if night is not None and not night.in_progress:
            night = None
        return night

    async def _start_tracking(self) -> None:
        if self._tonight is not None:
            logger.warning(
                "Night %s is still current; start ignored.", self._tonight.night_id
            )
            return
        new_night = SleepNight(start_time=self.clock())
        await self.repo.insert(new_night)
        self._set_tonight(await self._get_tonight_from_database())
        await self._refresh_nights()
        logger.info("Started tracking night %d", new_night.night_id)

    async def _stop_tracking(self) -> None:
        night = self._tonight
        if night is None:
            return
        if self.navigate_to_sleep_quality.pending:
            logger.info("Night %d already stopped; waiting for the rating screen.",
                        night.night_id)
            return

        # end_time must differ from start_time or the night still looks open
        end = self.clock()
        if end <= night.start_time:
            end = night.start_time + timedelta(microseconds=1)
        night = dataclasses.replace(night, end_time=end)

        await self.repo.update(night)
        self._set_tonight(night)
        await self._refresh_nights()
        logger.info("Stopped night %d after %s", night.night_id, night.duration)
        self.navigate_to_sleep_quality.fire(night.night_id)

    async def _clear(self) -> None:
        removed = await self.repo.clear()
        self._set_tonight(None)
        await self._refresh_nights()
        logger.info("Cleared %d nights.", removed)
        self.show_snackbar_event.fire(True)

    # ── Helpers ─────────────────────────────────────────────────────────────

    async def _refresh_nights(self) -> None:
        self._nights = await self.repo.get_all_nights()
        self._nights_text = format_nights(self._nights)
        self.nights_changed.emit(list(self._nights))
        self.nights_text_changed.emit(self._nights_text)
        self._update_flags()

    def _set_tonight(self, night: Optional[SleepNight]) -> None:
        self._tonight = night
        self.tonight_changed.emit(night)
        self._update_flags()

    def _compute_flags(self) -> Dict[str, bool]:
        return {
            "start": self._tonight is None,
            "stop": self._tonight is not None,
            "clear": len(self._nights) > 0,
        }

    def _update_flags(self) -> None:
        new = self._compute_flags()
        signals = {
            "start": self.start_enabled_changed,
            "stop": self.stop_enabled_changed,
            "clear": self.clear_enabled_changed,
        }
        old, self._flags = self._flags, new
        for key, signal in signals.items():
            if old[key] != new[key]:
                signal.emit(new[key])


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   The "view model" of the tracking screen. The front-end calls
#   start_tracking() / stop_tracking() / clear() and redraws from the Qt
#   signals this object emits.
#
# Key pieces:
#   - tonight: the running night. After stop it keeps pointing at the closed
#     night until the screen is initialized again or the data is cleared.
#   - start/stop/clear availability: derived from tonight and the history,
#     re-emitted only when a value flips.
#   - navigate_to_sleep_quality / show_snackbar_event: one-shot events the
#     front-end acknowledges with navigation_done() / snackbar_done().
#
# Data flow:
#   "start" → start_tracking() → TaskScope task → Repository.insert() →
#   tonight_changed + stop_enabled_changed → "stop" → Repository.update() →
#   navigate_to_sleep_quality fires with the night id → rating screen.
