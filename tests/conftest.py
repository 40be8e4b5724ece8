"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) built from the real ORM
metadata, so tests run without Docker / PostgreSQL / Redis.  Each test
gets a fresh engine and schema.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from campus_rides.domain.pricing import FareCalculator
from campus_rides.infrastructure import models  # noqa: F401  (registers tables)
from campus_rides.infrastructure.database import Base
from campus_rides.infrastructure.events import EventPublisher

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class RecordingPublisher(EventPublisher):
    """Keeps published events in memory instead of sending them to Redis."""

    def __init__(self):
        super().__init__(None, "test-events", enabled=False)
        self.events: list[tuple[str, dict]] = []

    async def publish(self, event: str, payload: dict) -> bool:
        self.events.append((event, payload))
        return True


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def calculator() -> FareCalculator:
    """Calculator with the reference constants 20 / 8 / 2, no timezone."""
    return FareCalculator(base_fare=20, per_km_rate=8, per_minute_rate=2)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Create tables on a private in-memory engine, then dispose it."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
