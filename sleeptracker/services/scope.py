"""
Task Scope — the background tasks owned by one screen's service.

Each service launches its store round-trips here instead of awaiting them in
the caller. Closing the scope (screen teardown) cancels whatever is still
running.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional, Set

logger = logging.getLogger(__name__)


class TaskScope:
    """
    A set of asyncio tasks with a shared lifetime.

    Failures are logged and handed to `on_error`; they never propagate into
    the event loop's default exception handler.
    """

    def __init__(
        self,
        name: str,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        self.name = name
        self.on_error = on_error
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active(self) -> int:
        return len(self._tasks)

    def launch(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedule `coro` in this scope and return its task without waiting."""
        if self._closed:
            coro.close()
            raise RuntimeError(f"Cannot launch: scope '{self.name}' is closed.")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def join(self) -> None:
        """Wait until every task launched so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel and await all running tasks. Further launches raise."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("Scope '%s' cancelled %d task(s).", self.name, len(tasks))

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        logger.error("Task in scope '%s' failed", self.name, exc_info=exc)
        if self.on_error:
            self.on_error(exc)


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   Gives every screen service a place to run its coroutines. The caller gets
#   the task back immediately; the service updates its state when the store
#   round-trip completes.
#
# Key pieces:
#   - launch(): create_task + bookkeeping; refuses once the scope is closed.
#   - _on_done(): reads the task's exception so it is never "unretrieved",
#     logs it and forwards it to the service's error signal.
#   - close(): teardown. Cancels in-flight work and waits for it to unwind.
