"""
Feedback endpoints
==================

POST /api/v1/feedback  -- submit a comment / rating
GET  /api/v1/feedback  -- list all feedback
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.api.dependencies import get_db
from campus_rides.api.middleware import limiter
from campus_rides.api.schemas import FeedbackCreateRequest, FeedbackResponse
from campus_rides.config import settings
from campus_rides.infrastructure.repositories import FeedbackRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post(
    "",
    status_code=201,
    response_model=FeedbackResponse,
    summary="Submit feedback",
)
@limiter.limit(settings.rate_limit)
async def submit_feedback(
    request: Request,
    body: FeedbackCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    record = await FeedbackRepository(db).create(**body.model_dump())
    logger.info("Feedback %s received (%s)", record.id, record.type)
    return record


@router.get(
    "",
    response_model=list[FeedbackResponse],
    summary="List feedback",
)
@limiter.limit(settings.rate_limit)
async def list_feedback(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    return await FeedbackRepository(db).list_all()
