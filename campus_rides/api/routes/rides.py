"""
Ride endpoints
==============

POST  /api/v1/rides                     -- book a ride (status ``requested``)
GET   /api/v1/rides?userId=&driverId=   -- list rides, optionally filtered
GET   /api/v1/rides/{ride_id}           -- fetch one ride
PATCH /api/v1/rides/{ride_id}/status    -- apply a status transition
PATCH /api/v1/rides/{ride_id}/accept    -- driver accepts (assigns driver)
PATCH /api/v1/rides/{ride_id}/start     -- driver picks the rider up
PATCH /api/v1/rides/{ride_id}/complete  -- driver drops the rider off
PATCH /api/v1/rides/{ride_id}/cancel    -- either party cancels
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.api.dependencies import (
    get_db,
    get_event_publisher,
    get_fare_calculator,
)
from campus_rides.api.middleware import limiter
from campus_rides.api.schemas import (
    ErrorResponse,
    RideAcceptRequest,
    RideCreateRequest,
    RideResponse,
    RideStatusUpdate,
)
from campus_rides.config import settings
from campus_rides.domain.enums import RideStatus
from campus_rides.domain.pricing import FareCalculator
from campus_rides.infrastructure.events import (
    RIDE_CREATED,
    RIDE_STATUS_CHANGED,
    EventPublisher,
)
from campus_rides.infrastructure.models import RideModel
from campus_rides.services.rides import RideLifecycleManager

router = APIRouter(prefix="/rides", tags=["rides"])

_TRANSITION_ERRORS = {
    404: {"model": ErrorResponse, "description": "Ride not found"},
    409: {"model": ErrorResponse, "description": "Illegal status transition"},
}


def _ride_event(ride: RideModel) -> dict:
    return {
        "ride_id": ride.id,
        "status": ride.status,
        "driver_id": ride.driver_id,
        "user_id": ride.user_id,
    }


@router.post(
    "",
    status_code=201,
    response_model=RideResponse,
    summary="Book a ride",
)
@limiter.limit(settings.rate_limit)
async def create_ride(
    request: Request,
    body: RideCreateRequest,
    db: AsyncSession = Depends(get_db),
    fares: FareCalculator = Depends(get_fare_calculator),
    events: EventPublisher = Depends(get_event_publisher),
):
    ride = await RideLifecycleManager(db, fares).create_ride(**body.model_dump())
    await db.commit()
    await events.publish(RIDE_CREATED, _ride_event(ride))
    return ride


@router.get(
    "",
    response_model=list[RideResponse],
    summary="List rides",
)
@limiter.limit(settings.rate_limit)
async def list_rides(
    request: Request,
    user_id: Optional[str] = Query(None, alias="userId"),
    driver_id: Optional[str] = Query(None, alias="driverId"),
    db: AsyncSession = Depends(get_db),
):
    return await RideLifecycleManager(db).list_rides(
        user_id=user_id, driver_id=driver_id
    )


@router.get(
    "/{ride_id}",
    response_model=RideResponse,
    summary="Get a ride",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_ride(
    request: Request,
    ride_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await RideLifecycleManager(db).get_ride(ride_id)


@router.patch(
    "/{ride_id}/status",
    response_model=RideResponse,
    summary="Update ride status",
    description=(
        "Applies one edge of the lifecycle: requested -> accepted -> "
        "in-progress -> completed, or requested | accepted -> cancelled.  "
        "Moving to accepted requires driverId."
    ),
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def update_ride_status(
    request: Request,
    ride_id: str,
    body: RideStatusUpdate,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    ride = await RideLifecycleManager(db).set_status(
        ride_id, body.status, driver_id=body.driver_id
    )
    await db.commit()
    await events.publish(RIDE_STATUS_CHANGED, _ride_event(ride))
    return ride


@router.patch(
    "/{ride_id}/accept",
    response_model=RideResponse,
    summary="Driver accepts a requested ride",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def accept_ride(
    request: Request,
    ride_id: str,
    body: RideAcceptRequest,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    ride = await RideLifecycleManager(db).accept(ride_id, body.driver_id)
    await db.commit()
    await events.publish(RIDE_STATUS_CHANGED, _ride_event(ride))
    return ride


async def _apply(
    db: AsyncSession, events: EventPublisher, ride_id: str, status: RideStatus
) -> RideModel:
    ride = await RideLifecycleManager(db).set_status(ride_id, status)
    await db.commit()
    await events.publish(RIDE_STATUS_CHANGED, _ride_event(ride))
    return ride


@router.patch(
    "/{ride_id}/start",
    response_model=RideResponse,
    summary="Start an accepted ride",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def start_ride(
    request: Request,
    ride_id: str,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    return await _apply(db, events, ride_id, RideStatus.IN_PROGRESS)


@router.patch(
    "/{ride_id}/complete",
    response_model=RideResponse,
    summary="Complete an in-progress ride",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def complete_ride(
    request: Request,
    ride_id: str,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    return await _apply(db, events, ride_id, RideStatus.COMPLETED)


@router.patch(
    "/{ride_id}/cancel",
    response_model=RideResponse,
    summary="Cancel a ride",
    description="Only requested or accepted rides can be cancelled.",
    responses=_TRANSITION_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def cancel_ride(
    request: Request,
    ride_id: str,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    return await _apply(db, events, ride_id, RideStatus.CANCELLED)
