"""
Seed script -- populates the database with the demo drivers.

Run after migrations:
    python seed.py

Creates:
  - 3 drivers parked around the main campus (two available, one on a ride)
"""

import asyncio

from sqlalchemy import func, select

from campus_rides.domain.enums import DriverStatus
from campus_rides.infrastructure.database import async_session_factory, engine
from campus_rides.infrastructure.models import DriverModel
from campus_rides.services.presence import DriverPresenceTracker

DRIVERS = [
    {
        "driver_code": "A101",
        "name": "John Kamau",
        "phone": "+256 123 456 789",
        "auto_number": "A101",
        "status": DriverStatus.AVAILABLE,
        "lat": 0.6103,
        "lng": 30.6463,
        "rating": 4.8,
    },
    {
        "driver_code": "A205",
        "name": "Sarah Mugisha",
        "phone": "+256 123 456 790",
        "auto_number": "A205",
        "status": DriverStatus.AVAILABLE,
        "lat": 0.6123,
        "lng": 30.6453,
        "rating": 4.9,
    },
    {
        "driver_code": "A089",
        "name": "Mike Rwomushana",
        "phone": "+256 123 456 791",
        "auto_number": "A089",
        "status": DriverStatus.ON_RIDE,
        "lat": 0.6143,
        "lng": 30.6483,
        "rating": 4.7,
    },
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        count = await session.scalar(select(func.count()).select_from(DriverModel))
        if count:
            print("Database already seeded. Skipping.")
            return

        tracker = DriverPresenceTracker(session)
        for d in DRIVERS:
            await tracker.register_driver(**d)
        print(f"  Created {len(DRIVERS)} drivers")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
