"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``drivers``   -- registered auto-rickshaw operators and their presence
* ``rides``     -- individual bookings between campus locations
* ``feedback``  -- rider comments and ratings, no lifecycle

Status columns are stored as plain strings holding the enum *values*
(``in-progress``, ``on-ride`` ...), which is also what the API exposes.

Indexes
-------
* **B-Tree** on ``rides.status``, ``rides.user_id``, ``rides.driver_id``
  and ``drivers.status`` for the predicate scans used by the API.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)

from .database import Base
from campus_rides.domain.enums import DriverStatus, RideStatus


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DriverModel(Base):
    __tablename__ = "drivers"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=True)
    # Human-facing code painted on the vehicle, e.g. "A101"
    driver_code = Column("driver_id", String(32), unique=True, nullable=False)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    auto_number = Column(Text, nullable=False)
    rating = Column(Numeric(3, 2), default=Decimal("0.00"))
    status = Column(String(20), default=DriverStatus.OFFLINE.value, nullable=False)
    lat = Column(Numeric(10, 8), nullable=True)
    lng = Column(Numeric(11, 8), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (Index("idx_drivers_status", "status"),)


class RideModel(Base):
    __tablename__ = "rides"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=True)
    driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=True)
    pickup_location = Column(Text, nullable=False)
    drop_location = Column(Text, nullable=False)
    passengers = Column(Integer, nullable=False)
    ride_type = Column(String(20), nullable=False)
    fare = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), default=RideStatus.REQUESTED.value, nullable=False)
    scheduled_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        Index("idx_rides_status", "status"),
        Index("idx_rides_user", "user_id"),
        Index("idx_rides_driver", "driver_id"),
    )


class FeedbackModel(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    student_id = Column(Text, nullable=True)
    type = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
