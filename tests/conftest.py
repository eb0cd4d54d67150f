"""Shared fixtures: Qt core app, in-memory database, fake clock, signal recorder."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import pytest_asyncio

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from PySide6.QtCore import QCoreApplication

from sleeptracker.data.database import Database
from sleeptracker.data.repository import Repository

T0 = datetime(2026, 3, 14, 22, 30, 0)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest_asyncio.fixture
async def db():
    """In-memory database with the schema created."""
    database = Database(db_path=Path(":memory:"))
    await database.connect()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def repo(db):
    return Repository(db.conn)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def record():
    """record(signal) -> list that collects every value the signal emits."""
    def _record(signal):
        values = []
        signal.connect(lambda value: values.append(value))
        return values
    return _record
