"""
Driver endpoints
================

POST  /api/v1/drivers                        -- register a driver
GET   /api/v1/drivers?status=                -- list drivers (live map feed)
GET   /api/v1/drivers/by-code/{driver_code}  -- look up by vehicle code
GET   /api/v1/drivers/{driver_id}            -- fetch one driver
PATCH /api/v1/drivers/{driver_id}/status     -- presence report
PATCH /api/v1/drivers/{driver_id}/location   -- position report
GET   /api/v1/drivers/{driver_id}/rides        -- rides assigned to the driver
GET   /api/v1/drivers/{driver_id}/current-ride -- accepted / in-progress ride
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.api.dependencies import get_db, get_event_publisher
from campus_rides.api.middleware import limiter
from campus_rides.api.schemas import (
    DriverCreateRequest,
    DriverLocationUpdate,
    DriverResponse,
    DriverStatusUpdate,
    ErrorResponse,
    RideResponse,
)
from campus_rides.config import settings
from campus_rides.domain.enums import DriverStatus
from campus_rides.infrastructure.events import (
    DRIVER_LOCATION_UPDATED,
    DRIVER_STATUS_CHANGED,
    EventPublisher,
)
from campus_rides.services.presence import DriverPresenceTracker
from campus_rides.services.rides import RideLifecycleManager

router = APIRouter(prefix="/drivers", tags=["drivers"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Driver not found"}}


@router.post(
    "",
    status_code=201,
    response_model=DriverResponse,
    summary="Register a driver",
    responses={409: {"model": ErrorResponse, "description": "Duplicate driver code"}},
)
@limiter.limit(settings.rate_limit)
async def register_driver(
    request: Request,
    body: DriverCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await DriverPresenceTracker(db).register_driver(**body.model_dump())


@router.get(
    "",
    response_model=list[DriverResponse],
    summary="List drivers with their status and location",
)
@limiter.limit(settings.rate_limit)
async def list_drivers(
    request: Request,
    status: Optional[DriverStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await DriverPresenceTracker(db).list_drivers(status)


@router.get(
    "/by-code/{driver_code}",
    response_model=DriverResponse,
    summary="Get a driver by vehicle code",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def get_driver_by_code(
    request: Request,
    driver_code: str,
    db: AsyncSession = Depends(get_db),
):
    return await DriverPresenceTracker(db).get_by_code(driver_code)


@router.get(
    "/{driver_id}",
    response_model=DriverResponse,
    summary="Get a driver",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def get_driver(
    request: Request,
    driver_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await DriverPresenceTracker(db).get_driver(driver_id)


@router.patch(
    "/{driver_id}/status",
    response_model=DriverResponse,
    summary="Report driver status",
    description="Any of available / on-ride / offline may follow any other.",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def update_driver_status(
    request: Request,
    driver_id: str,
    body: DriverStatusUpdate,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    driver = await DriverPresenceTracker(db).update_status(driver_id, body.status)
    await db.commit()
    await events.publish(
        DRIVER_STATUS_CHANGED, {"driver_id": driver.id, "status": driver.status}
    )
    return driver


@router.patch(
    "/{driver_id}/location",
    response_model=DriverResponse,
    summary="Report driver location",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def update_driver_location(
    request: Request,
    driver_id: str,
    body: DriverLocationUpdate,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
):
    driver = await DriverPresenceTracker(db).update_location(
        driver_id, body.lat, body.lng
    )
    await db.commit()
    await events.publish(
        DRIVER_LOCATION_UPDATED,
        {"driver_id": driver.id, "lat": body.lat, "lng": body.lng},
    )
    return driver


@router.get(
    "/{driver_id}/rides",
    response_model=list[RideResponse],
    summary="List rides assigned to a driver",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def list_driver_rides(
    request: Request,
    driver_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await RideLifecycleManager(db).rides_for_driver(driver_id)


@router.get(
    "/{driver_id}/current-ride",
    response_model=Optional[RideResponse],
    summary="The ride a driver is currently serving, or null",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def get_current_ride(
    request: Request,
    driver_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await RideLifecycleManager(db).current_ride_for_driver(driver_id)
