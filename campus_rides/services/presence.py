"""
Driver Presence Tracker.

Owns each driver's availability status and last reported position.  Both
are plain overwrites: any of ``available`` / ``on-ride`` / ``offline`` may
follow any other, and a location report replaces lat and lng together.
Nothing here knows which ride a driver is serving; that linkage lives on
the ride (see ``RideLifecycleManager.current_ride_for_driver``).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.domain.enums import DriverStatus
from campus_rides.domain.errors import DriverNotFound, DuplicateDriver
from campus_rides.infrastructure.models import DriverModel
from campus_rides.infrastructure.repositories import DriverRepository

logger = logging.getLogger(__name__)


def _coord(value: Optional[float]) -> Optional[Decimal]:
    return None if value is None else Decimal(str(value))


class DriverPresenceTracker:
    def __init__(self, session: AsyncSession):
        self.drivers = DriverRepository(session)

    async def register_driver(
        self,
        *,
        driver_code: str,
        name: str,
        phone: str,
        auto_number: str,
        user_id: Optional[str] = None,
        status: DriverStatus | str = DriverStatus.OFFLINE,
        rating: Decimal | float = Decimal("0.00"),
        lat: Optional[float] = None,
        lng: Optional[float] = None,
    ) -> DriverModel:
        if await self.drivers.get_by_code(driver_code) is not None:
            raise DuplicateDriver(driver_code)
        driver = await self.drivers.create(
            driver_code=driver_code,
            name=name,
            phone=phone,
            auto_number=auto_number,
            user_id=user_id,
            status=DriverStatus(status).value,
            rating=Decimal(str(rating)).quantize(Decimal("0.01")),
            lat=_coord(lat),
            lng=_coord(lng),
        )
        logger.info("Driver %s registered as %s", driver_code, driver.id)
        return driver

    async def get_driver(self, driver_id: str) -> DriverModel:
        driver = await self.drivers.get_by_id(driver_id)
        if driver is None:
            raise DriverNotFound(driver_id)
        return driver

    async def get_by_code(self, driver_code: str) -> DriverModel:
        driver = await self.drivers.get_by_code(driver_code)
        if driver is None:
            raise DriverNotFound(driver_code)
        return driver

    async def list_drivers(
        self, status: DriverStatus | str | None = None
    ) -> list[DriverModel]:
        if status is None:
            return await self.drivers.list_all()
        return await self.drivers.list_where("status", DriverStatus(status).value)

    async def update_status(
        self, driver_id: str, status: DriverStatus | str
    ) -> DriverModel:
        status = DriverStatus(status)
        driver = await self.drivers.update(driver_id, status=status.value)
        if driver is None:
            raise DriverNotFound(driver_id)
        logger.info("Driver %s is now %s", driver_id, status.value)
        return driver

    async def update_location(
        self, driver_id: str, lat: float, lng: float
    ) -> DriverModel:
        driver = await self.drivers.update(driver_id, lat=_coord(lat), lng=_coord(lng))
        if driver is None:
            raise DriverNotFound(driver_id)
        logger.debug("Driver %s at (%s, %s)", driver_id, lat, lng)
        return driver
