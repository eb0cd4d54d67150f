"""
Console front-end — drives the two screens from a line-oriented prompt.

Tracking screen commands: start, stop, clear, history.
Rating screen commands:   0-5 (or "rate N"), skip.
Everywhere:               help, quit.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime
from typing import Callable, Optional, TextIO, Tuple

from sleeptracker.data.models import QUALITY_LABELS
from sleeptracker.data.repository import Repository
from sleeptracker.services.history import format_timestamp
from sleeptracker.services.quality_service import SleepQualityService
from sleeptracker.services.tracker_service import SleepTrackerService

logger = logging.getLogger(__name__)

TRACKER_SCREEN = "tracker"
QUALITY_SCREEN = "quality"

HELP_TEXT = """\
Tracking screen: start | stop | clear | history
Rating screen:   0-5 (or 'rate N') | skip
Anywhere:        help | quit"""


class ConsoleApp:
    """Owns whichever screen service is showing and routes commands to it."""

    def __init__(
        self,
        repo: Repository,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.repo = repo
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.clock = clock
        self.tracker: Optional[SleepTrackerService] = None
        self.quality: Optional[SleepQualityService] = None
        self._next_screen: Optional[Tuple[str, Optional[int]]] = None

    @property
    def screen(self) -> Optional[str]:
        if self.quality is not None:
            return QUALITY_SCREEN
        if self.tracker is not None:
            return TRACKER_SCREEN
        return None

    # ── Main loop ───────────────────────────────────────────────────────────

    async def run(self) -> None:
        await self.show_tracker()
        self._print("TrackMySleep. Type 'help' for commands.")
        loop = asyncio.get_running_loop()
        try:
            while True:
                self.stdout.write(f"[{self.screen}]> ")
                self.stdout.flush()
                line = await loop.run_in_executor(None, self.stdin.readline)
                if not line:
                    break
                if not await self.handle(line):
                    break
        finally:
            await self.shutdown()

    async def handle(self, line: str) -> bool:
        """Run one command. Returns False when the user asked to quit."""
        words = line.split()
        if not words:
            return True
        cmd, args = words[0].lower(), words[1:]
        if cmd in ("quit", "exit"):
            return False
        if cmd == "help":
            self._print(HELP_TEXT)
        elif self.quality is not None:
            await self._handle_quality(cmd, args)
        elif self.tracker is not None:
            await self._handle_tracker(cmd, args)
        await self._apply_navigation()
        return True

    async def shutdown(self) -> None:
        if self.tracker is not None:
            await self.tracker.close()
            self.tracker = None
        if self.quality is not None:
            await self.quality.close()
            self.quality = None

    # ── Screens ─────────────────────────────────────────────────────────────

    async def show_tracker(self) -> None:
        await self.shutdown()
        tracker = SleepTrackerService(self.repo, clock=self.clock)
        tracker.navigate_to_sleep_quality.changed.connect(self._on_navigate_to_quality)
        tracker.show_snackbar_event.changed.connect(self._on_snackbar)
        tracker.error_occurred.connect(self._on_error)
        self.tracker = tracker
        await self._wait(tracker.initialize())
        if tracker.tonight is not None:
            self._print(f"Still tracking the night started "
                        f"{format_timestamp(tracker.tonight.start_time)}.")

    async def show_quality(self, night_id: int) -> None:
        await self.shutdown()
        quality = SleepQualityService(self.repo, night_id)
        quality.navigate_to_sleep_tracker.changed.connect(self._on_navigate_to_tracker)
        quality.error_occurred.connect(self._on_error)
        self.quality = quality
        self._print("How was your sleep?")
        for value, label in QUALITY_LABELS.items():
            self._print(f"  {value}: {label}")

    # ── Command handlers ────────────────────────────────────────────────────

    async def _handle_tracker(self, cmd: str, args: list) -> None:
        tracker = self.tracker
        if cmd == "start":
            if not tracker.start_enabled:
                self._print("A night is already being tracked.")
                return
            await self._wait(tracker.start_tracking())
            if tracker.tonight is not None:
                self._print(f"Tracking started {format_timestamp(tracker.tonight.start_time)}.")
        elif cmd == "stop":
            if not tracker.stop_enabled:
                self._print("Nothing to stop.")
                return
            await self._wait(tracker.stop_tracking())
        elif cmd == "clear":
            if not tracker.clear_enabled:
                self._print("Nothing to clear.")
                return
            await self._wait(tracker.clear())
        elif cmd == "history":
            self._print(tracker.nights_text)
        else:
            self._print(f"Unknown command '{cmd}'. Type 'help'.")

    async def _handle_quality(self, cmd: str, args: list) -> None:
        if cmd == "skip":
            self._next_screen = (TRACKER_SCREEN, None)
            return
        raw = args[0] if cmd == "rate" and args else cmd
        try:
            value = int(raw)
        except ValueError:
            self._print("Enter a rating from 0 to 5, or 'skip'.")
            return
        await self._wait(self.quality.set_quality(value))

    # ── Signal handlers ─────────────────────────────────────────────────────

    def _on_navigate_to_quality(self, night_id: Optional[int]) -> None:
        if night_id is None:
            return
        self._next_screen = (QUALITY_SCREEN, night_id)
        self.tracker.navigation_done()

    def _on_navigate_to_tracker(self, done: Optional[bool]) -> None:
        if not done:
            return
        self._print("Rating saved.")
        self._next_screen = (TRACKER_SCREEN, None)
        self.quality.navigation_done()

    def _on_snackbar(self, show: Optional[bool]) -> None:
        if not show:
            return
        self._print("All sleep data has been cleared.")
        self.tracker.snackbar_done()

    def _on_error(self, exc: BaseException) -> None:
        self._print(f"Error: {exc}")

    # ── Helpers ─────────────────────────────────────────────────────────────

    async def _apply_navigation(self) -> None:
        if self._next_screen is None:
            return
        screen, night_id = self._next_screen
        self._next_screen = None
        logger.debug("Switching to the %s screen", screen)
        if screen == QUALITY_SCREEN:
            await self.show_quality(night_id)
        else:
            await self.show_tracker()

    @staticmethod
    async def _wait(task: asyncio.Task) -> None:
        # failures already reach the user through error_occurred
        await asyncio.gather(task, return_exceptions=True)

    def _print(self, text: str) -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()
