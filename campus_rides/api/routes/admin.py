"""
Admin / observability endpoints
===============================

GET /api/v1/admin/analytics -- aggregate counts, revenue and ratings
GET /api/v1/admin/health    -- simple health check
"""

from dataclasses import asdict
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.api.dependencies import get_db
from campus_rides.api.middleware import limiter
from campus_rides.api.schemas import AnalyticsResponse, HealthResponse
from campus_rides.config import settings
from campus_rides.infrastructure.repositories import (
    DriverRepository,
    FeedbackRepository,
    RideRepository,
)
from campus_rides.services.analytics import summarize

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    summary="Aggregate analytics across drivers, rides and feedback",
)
@limiter.limit(settings.rate_limit)
async def get_analytics(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    summary = summarize(
        await DriverRepository(db).list_all(),
        await RideRepository(db).list_all(),
        await FeedbackRepository(db).list_all(),
        tz=ZoneInfo(settings.timezone),
    )
    return AnalyticsResponse(**asdict(summary))


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
