"""
Seed Data Generator — creates realistic fake nights for development and testing.

Run: python scripts/seed_data.py
"""

import asyncio
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sleeptracker.config import Settings
from sleeptracker.data.database import Database
from sleeptracker.data.models import SleepNight
from sleeptracker.data.repository import Repository


async def seed(num_nights: int = 30) -> None:
    db = Database(Settings().db_path)
    conn = await db.connect()
    repo = Repository(conn)

    base_date = datetime.now() - timedelta(days=num_nights)

    try:
        for i in range(num_nights):
            # Bedtime between 21:30 and 01:00
            bedtime = base_date.replace(hour=21, minute=30, second=0, microsecond=0)
            start = bedtime + timedelta(days=i, minutes=random.randint(0, 210))
            hours_slept = random.gauss(7.2, 1.0)
            end = start + timedelta(hours=max(3.0, min(hours_slept, 11.0)))

            # Longer nights tend to get better ratings
            quality = int(round(min(5, max(0, (hours_slept - 4) + random.uniform(-1, 1)))))

            night = SleepNight(start_time=start, end_time=end, sleep_quality=quality)
            await repo.insert(night)

        print(f"Seeded {num_nights} nights ({await repo.count()} total).")
    finally:
        await db.close()


if __name__ == "__main__":
    asyncio.run(seed())
