"""
TrackMySleep — record nights and rate how well you slept.
Entry point for the application.
"""

import asyncio
import faulthandler
import logging
import sys
from pathlib import Path

faulthandler.enable()

# Ensure the package is importable when run from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parent))

from PySide6.QtCore import QCoreApplication

from sleeptracker.config import Settings
from sleeptracker.data.database import Database
from sleeptracker.data.repository import Repository
from sleeptracker.ui.console import ConsoleApp


def setup_logging(settings: Settings) -> None:
    console = logging.StreamHandler()
    console.setLevel(settings.console_log_level)
    logfile = logging.FileHandler(settings.log_file, encoding="utf-8")
    logfile.setLevel(settings.log_level)
    logging.basicConfig(
        level=min(settings.log_level, settings.console_log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[console, logfile],
    )


async def run(settings: Settings) -> None:
    db = Database(settings.db_path)
    conn = await db.connect()
    try:
        await ConsoleApp(Repository(conn)).run()
    finally:
        await db.close()


def main() -> None:
    settings = Settings()
    setup_logging(settings)
    logger = logging.getLogger(__name__)
    logger.info("Starting TrackMySleep...")

    # Services are QObjects; signals stay direct, no Qt event loop is run
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    app.setApplicationName("TrackMySleep")
    app.setOrganizationName("TrackMySleep")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass
    logger.info("TrackMySleep stopped.")


if __name__ == "__main__":
    main()
