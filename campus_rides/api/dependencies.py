"""FastAPI dependency injection helpers."""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from campus_rides.config import settings
from campus_rides.domain.pricing import FareCalculator
from campus_rides.infrastructure.database import async_session_factory
from campus_rides.infrastructure.events import EventPublisher
from campus_rides.infrastructure.redis_client import get_redis


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@lru_cache
def get_fare_calculator() -> FareCalculator:
    return FareCalculator.from_settings(settings)


async def get_event_publisher() -> EventPublisher:
    if not settings.events_enabled:
        return EventPublisher(None, settings.events_channel, enabled=False)
    return EventPublisher(await get_redis(), settings.events_channel)
