"""
FastAPI application factory.

* Registers routes for fares, rides, drivers, feedback and admin.
* Maps domain errors to HTTP status codes.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import InterfaceError, OperationalError

from campus_rides.api.middleware import limiter
from campus_rides.api.routes import admin, drivers, fares, feedback, rides
from campus_rides.config import settings
from campus_rides.domain.errors import (
    DuplicateDriver,
    InvalidStateTransition,
    NotFound,
)
from campus_rides.infrastructure.database import engine
from campus_rides.infrastructure.redis_client import close_redis

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled DB and Redis connections on shutdown."""
    logger.info("Campus rides API starting")
    yield
    await engine.dispose()
    await close_redis()
    logger.info("Campus rides API stopped")


async def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _conflict(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def _store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Record store unavailable: %s", exc)
    return JSONResponse(
        status_code=503, content={"detail": "Record store unavailable"}
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Campus Auto-Rickshaw Rides API",
        description=(
            "Students book auto-rickshaw rides between campus landmarks, "
            "drivers report status and location, and admins read "
            "aggregate analytics.  Fares are estimated from a static "
            "campus distance table."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(InvalidStateTransition, _conflict)
    app.add_exception_handler(DuplicateDriver, _conflict)
    app.add_exception_handler(OperationalError, _store_unavailable)
    app.add_exception_handler(InterfaceError, _store_unavailable)

    # Routers
    app.include_router(fares.router, prefix="/api/v1")
    app.include_router(rides.router, prefix="/api/v1")
    app.include_router(drivers.router, prefix="/api/v1")
    app.include_router(feedback.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
