"""
SQLite database initialization and connection management.

Single responsibility: own the connection and create the table.
All actual queries live in Repository.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import aiosqlite

from sleeptracker.errors import StoreError

logger = logging.getLogger(__name__)

# Default DB lives at the repo root
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent.parent / "sleep_history.db"

SCHEMA_SQL = """
-- Nights --------------------------------------------------------------------
CREATE TABLE IF NOT EXISTS daily_sleep_quality_table (
    night_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    start_time      TEXT    NOT NULL,
    end_time        TEXT    NOT NULL,
    quality_rating  INTEGER NOT NULL DEFAULT -1
);

CREATE INDEX IF NOT EXISTS idx_nights_start ON daily_sleep_quality_table(start_time);
"""


class Database:
    """Thin wrapper around an aiosqlite connection."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self.db_path = db_path or DEFAULT_DB_PATH
        self.conn: Optional[aiosqlite.Connection] = None

    # -- lifecycle -----------------------------------------------------------

    async def connect(self) -> aiosqlite.Connection:
        """Open (or return existing) connection and ensure schema exists."""
        if self.conn is not None:
            return self.conn
        logger.info("Connecting to SQLite at %s", self.db_path)
        conn: Optional[aiosqlite.Connection] = None
        try:
            conn = await aiosqlite.connect(str(self.db_path))
            conn.row_factory = aiosqlite.Row
            await conn.execute("PRAGMA journal_mode=WAL")
            await self._create_tables(conn)
        except aiosqlite.Error as exc:
            # never cache a connection without its schema
            if conn is not None:
                await conn.close()
            raise StoreError("open the database", f"Cannot open {self.db_path}: {exc}") from exc
        self.conn = conn
        return self.conn

    async def close(self) -> None:
        if self.conn:
            await self.conn.close()
            self.conn = None
            logger.info("Database connection closed.")

    # -- internal ------------------------------------------------------------

    @staticmethod
    async def _create_tables(conn: aiosqlite.Connection) -> None:
        await conn.executescript(SCHEMA_SQL)
        await conn.commit()
        logger.info("Database schema ensured.")
