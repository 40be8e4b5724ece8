"""
Ride Lifecycle Manager
======================

Creates bookings and applies externally triggered status changes:

* driver accept   -- requested   -> accepted   (assigns ``driver_id``)
* driver start    -- accepted    -> in-progress
* driver complete -- in-progress -> completed
* either cancel   -- requested | accepted -> cancelled

Every change is checked against ``RIDE_TRANSITIONS``; terminal rides never
move again.  The fare is written once at creation and never touched after.

Notification fan-out is not done here; the API layer publishes events
after a successful call.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.domain.enums import RideStatus, RideType
from campus_rides.domain.errors import (
    DriverNotFound,
    InvalidStateTransition,
    RideNotFound,
)
from campus_rides.domain.lifecycle import is_terminal, transition
from campus_rides.domain.pricing import FareCalculator
from campus_rides.infrastructure.models import RideModel
from campus_rides.infrastructure.repositories import (
    DriverRepository,
    RideRepository,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class RideLifecycleManager:
    def __init__(
        self,
        session: AsyncSession,
        fare_calculator: Optional[FareCalculator] = None,
    ):
        self.rides = RideRepository(session)
        self.drivers = DriverRepository(session)
        self.fare_calculator = fare_calculator

    # ── Creation ──────────────────────────────────────────────────────

    async def create_ride(
        self,
        *,
        pickup_location: str,
        drop_location: str,
        passengers: int,
        ride_type: RideType | str,
        fare: Decimal | float | int | None = None,
        scheduled_at: Optional[datetime] = None,
        user_id: Optional[str] = None,
    ) -> RideModel:
        """Append a new ride in ``requested``.

        *fare* is frozen as given.  When it is omitted the trip is priced
        here with the configured calculator.
        """
        if fare is None:
            if self.fare_calculator is None:
                raise ValueError("fare is required when no fare calculator is configured")
            fare = self.fare_calculator.calculate(
                pickup_location, drop_location, passengers, scheduled_at
            ).total

        ride = await self.rides.create(
            user_id=user_id,
            driver_id=None,
            pickup_location=pickup_location,
            drop_location=drop_location,
            passengers=passengers,
            ride_type=RideType(ride_type).value,
            fare=Decimal(str(fare)).quantize(CENTS),
            status=RideStatus.REQUESTED.value,
            scheduled_at=scheduled_at,
        )
        logger.info(
            "Ride %s requested: %s -> %s, %d passenger(s), fare %s",
            ride.id, pickup_location, drop_location, passengers, ride.fare,
        )
        return ride

    # ── Queries ───────────────────────────────────────────────────────

    async def get_ride(self, ride_id: str) -> RideModel:
        ride = await self.rides.get_by_id(ride_id)
        if ride is None:
            raise RideNotFound(ride_id)
        return ride

    async def list_rides(
        self, user_id: Optional[str] = None, driver_id: Optional[str] = None
    ) -> list[RideModel]:
        if user_id is not None:
            rides = await self.rides.list_where("user_id", user_id)
        elif driver_id is not None:
            rides = await self.rides.list_where("driver_id", driver_id)
        else:
            return await self.rides.list_all()
        if user_id is not None and driver_id is not None:
            rides = [r for r in rides if r.driver_id == driver_id]
        return rides

    async def rides_for_driver(self, driver_id: str) -> list[RideModel]:
        await self._require_driver(driver_id)
        return await self.rides.list_where("driver_id", driver_id)

    async def current_ride_for_driver(self, driver_id: str) -> Optional[RideModel]:
        """The accepted / in-progress ride a driver is serving, if any."""
        await self._require_driver(driver_id)
        return await self.rides.get_active_for_driver(driver_id)

    # ── Transitions ───────────────────────────────────────────────────

    async def set_status(
        self,
        ride_id: str,
        status: RideStatus | str,
        *,
        driver_id: Optional[str] = None,
    ) -> RideModel:
        """Apply one lifecycle edge.  ``accepted`` must name an existing driver."""
        ride = await self.get_ride(ride_id)
        previous = ride.status
        try:
            new_status = transition(previous, status)
        except InvalidStateTransition:
            if is_terminal(previous):
                logger.warning(
                    "Rejected ride %s -> %s: ride is %s", ride_id, status, previous
                )
            else:
                logger.warning(
                    "Rejected ride %s transition %s -> %s", ride_id, previous, status
                )
            raise
        if new_status is RideStatus.ACCEPTED and driver_id is None:
            raise ValueError("a driver_id is required to accept a ride")
        patch = {"status": new_status.value}
        if driver_id is not None:
            await self._require_driver(driver_id)
            patch["driver_id"] = driver_id
        ride = await self.rides.update(ride_id, **patch)
        if ride is None:
            raise RideNotFound(ride_id)
        logger.info("Ride %s: %s -> %s", ride_id, previous, new_status.value)
        return ride

    async def accept(self, ride_id: str, driver_id: str) -> RideModel:
        return await self.set_status(ride_id, RideStatus.ACCEPTED, driver_id=driver_id)

    async def start(self, ride_id: str) -> RideModel:
        return await self.set_status(ride_id, RideStatus.IN_PROGRESS)

    async def complete(self, ride_id: str) -> RideModel:
        return await self.set_status(ride_id, RideStatus.COMPLETED)

    async def cancel(self, ride_id: str) -> RideModel:
        return await self.set_status(ride_id, RideStatus.CANCELLED)

    async def _require_driver(self, driver_id: str) -> None:
        if await self.drivers.get_by_id(driver_id) is None:
            raise DriverNotFound(driver_id)
