"""
Repository — the single place where SQL lives.

Every other module talks to Repository, never to raw SQL. All methods are
coroutines so the console loop never blocks on disk I/O.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

import aiosqlite

from sleeptracker.errors import NightNotFoundError, StoreError

from .models import SleepNight

logger = logging.getLogger(__name__)

TABLE = "daily_sleep_quality_table"


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures as StoreError."""
    try:
        yield
    except aiosqlite.Error as exc:
        logger.error("Store failed to %s: %s", action, exc)
        raise StoreError(action) from exc


class Repository:
    """Data-access layer wrapping an aiosqlite connection."""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn

    # ── Writes ──────────────────────────────────────────────────────────────

    async def insert(self, night: SleepNight) -> int:
        """Store a new night. The assigned id is also set on `night`."""
        with _store_errors("insert a night"):
            cur = await self.conn.execute(
                f"INSERT INTO {TABLE} (start_time, end_time, quality_rating) "
                "VALUES (?, ?, ?)",
                (
                    night.start_time.isoformat(),
                    night.end_time.isoformat(),
                    night.sleep_quality,
                ),
            )
            await self.conn.commit()
        night.night_id = cur.lastrowid
        logger.debug("Inserted night %d", night.night_id)
        return night.night_id

    async def update(self, night: SleepNight) -> None:
        with _store_errors("update a night"):
            cur = await self.conn.execute(
                f"UPDATE {TABLE} SET start_time = ?, end_time = ?, quality_rating = ? "
                "WHERE night_id = ?",
                (
                    night.start_time.isoformat(),
                    night.end_time.isoformat(),
                    night.sleep_quality,
                    night.night_id,
                ),
            )
            await self.conn.commit()
        if cur.rowcount == 0:
            raise NightNotFoundError(night.night_id)

    async def clear(self) -> int:
        """Delete every night. Returns count deleted."""
        with _store_errors("clear all nights"):
            cur = await self.conn.execute(f"DELETE FROM {TABLE}")
            await self.conn.commit()
        logger.warning("Deleted %d nights.", cur.rowcount)
        return cur.rowcount

    # ── Reads ───────────────────────────────────────────────────────────────

    async def get(self, night_id: int) -> SleepNight:
        with _store_errors("load a night"):
            async with self.conn.execute(
                f"SELECT * FROM {TABLE} WHERE night_id = ?", (night_id,)
            ) as cur:
                row = await cur.fetchone()
        if row is None:
            raise NightNotFoundError(night_id)
        return self._row_to_night(row)

    async def get_tonight(self) -> Optional[SleepNight]:
        """Most recently created night, or None when the table is empty."""
        with _store_errors("load the latest night"):
            async with self.conn.execute(
                f"SELECT * FROM {TABLE} ORDER BY night_id DESC LIMIT 1"
            ) as cur:
                row = await cur.fetchone()
        return self._row_to_night(row) if row else None

    async def get_all_nights(self) -> List[SleepNight]:
        with _store_errors("list nights"):
            async with self.conn.execute(
                f"SELECT * FROM {TABLE} ORDER BY night_id DESC"
            ) as cur:
                rows = await cur.fetchall()
        return [self._row_to_night(r) for r in rows]

    async def count(self) -> int:
        with _store_errors("count nights"):
            async with self.conn.execute(f"SELECT COUNT(*) FROM {TABLE}") as cur:
                row = await cur.fetchone()
        return row[0]

    # ── Row mappers ─────────────────────────────────────────────────────────

    @staticmethod
    def _row_to_night(row: aiosqlite.Row) -> SleepNight:
        return SleepNight(
            night_id=row["night_id"],
            start_time=datetime.fromisoformat(row["start_time"]),
            end_time=datetime.fromisoformat(row["end_time"]),
            sleep_quality=row["quality_rating"],
        )


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   The only place SQL for nights lives. Services call insert(), update(),
#   get_tonight() and friends instead of writing SQL strings.
#
# Key methods:
#   - insert / update / clear: the three writes the app performs.
#   - get_tonight(): the latest night by id. Whether it is still running is
#     decided by the caller (end_time == start_time).
#   - get_all_nights(): the history, newest first.
#
# Data flow:
#   Service coroutine → await Repository.method() → aiosqlite worker thread
#   → aiosqlite.Row → SleepNight dataclass
#
# Errors:
#   Any aiosqlite.Error becomes StoreError; an unknown id becomes
#   NightNotFoundError. Nothing is retried.
