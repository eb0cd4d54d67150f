"""
One-shot events for the front-end: "go to the rating screen", "data cleared".

An event holds at most one value. It is published once when fired and stays
pending until the consumer acknowledges it with reset(), so re-observing the
service (e.g. after the screen is rebuilt) never replays an action twice.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class PendingEvent(QObject):
    """Single-slot event. `changed` carries the new value, or None on reset."""

    changed = Signal(object)

    def __init__(self, name: str, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.name = name
        self._value: Any = None

    @property
    def value(self) -> Any:
        return self._value

    @property
    def pending(self) -> bool:
        return self._value is not None

    def fire(self, value: Any = True) -> bool:
        """Publish `value` unless an earlier value is still unacknowledged."""
        if value is None:
            raise ValueError("An event value cannot be None.")
        if self._value is not None:
            logger.debug("Event '%s' still pending; not firing again.", self.name)
            return False
        self._value = value
        logger.debug("Event '%s' fired with %r", self.name, value)
        self.changed.emit(value)
        return True

    def reset(self) -> None:
        if self._value is None:
            return
        self._value = None
        self.changed.emit(None)
