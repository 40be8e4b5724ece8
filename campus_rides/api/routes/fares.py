"""
Fare estimate and location endpoints
====================================

GET  /api/v1/locations       -- the fixed campus points of interest
POST /api/v1/fares/estimate  -- itemised fare for a trip
"""

from dataclasses import asdict
import logging

from fastapi import APIRouter, Depends, Request

from campus_rides.api.dependencies import get_fare_calculator
from campus_rides.api.middleware import limiter
from campus_rides.api.schemas import (
    FareEstimateRequest,
    FareEstimateResponse,
    LocationResponse,
)
from campus_rides.config import settings
from campus_rides.domain.distance import CAMPUS_LOCATIONS
from campus_rides.domain.pricing import FareCalculator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["fares"])


@router.get(
    "/locations",
    response_model=list[LocationResponse],
    summary="List campus locations",
)
@limiter.limit(settings.rate_limit)
async def list_locations(request: Request):
    return [LocationResponse(key=loc.key, label=loc.label) for loc in CAMPUS_LOCATIONS]


@router.post(
    "/fares/estimate",
    response_model=FareEstimateResponse,
    summary="Estimate a fare",
    description=(
        "Unknown locations are priced at the default distance; the "
        "estimate never fails on route data."
    ),
)
@limiter.limit(settings.rate_limit)
async def estimate_fare(
    request: Request,
    body: FareEstimateRequest,
    fares: FareCalculator = Depends(get_fare_calculator),
):
    if (body.pickup_location, body.drop_location) not in fares.distances:
        logger.info(
            "No campus distance for %s -> %s, pricing at %s km",
            body.pickup_location,
            body.drop_location,
            fares.distances.default_km,
        )
    estimate = fares.calculate(
        body.pickup_location,
        body.drop_location,
        body.passengers,
        body.scheduled_at,
    )
    return FareEstimateResponse(**asdict(estimate), currency=settings.currency)
