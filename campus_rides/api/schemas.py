"""Pydantic request / response schemas for the REST API.

JSON field names are camelCase (``pickupLocation``, ``rideType`` ...);
snake_case names are accepted on input as well.  Currency values
(``fare``, ``rating``, ``totalRevenue``) serialize as decimal strings.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from campus_rides.domain.enums import DriverStatus, RideStatus, RideType


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ── Requests ──────────────────────────────────────────────────────────


class FareEstimateRequest(CamelModel):
    pickup_location: str = Field(..., min_length=1)
    drop_location: str = Field(..., min_length=1)
    # Values below 1 are priced as a single passenger
    passengers: int = 1
    scheduled_at: Optional[datetime] = None


class RideCreateRequest(CamelModel):
    pickup_location: str = Field(..., min_length=1)
    drop_location: str = Field(..., min_length=1)
    passengers: int = Field(1, ge=1)
    ride_type: RideType = RideType.SINGLE
    fare: Optional[Decimal] = Field(
        None,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Total from a prior estimate.  Priced server-side when omitted.",
    )
    scheduled_at: Optional[datetime] = None
    user_id: Optional[str] = None


class RideStatusUpdate(CamelModel):
    status: RideStatus
    driver_id: Optional[str] = None

    @model_validator(mode="after")
    def _accept_names_a_driver(self):
        if self.status is RideStatus.ACCEPTED and self.driver_id is None:
            raise ValueError("driverId is required to accept a ride")
        return self


class RideAcceptRequest(CamelModel):
    driver_id: str


class DriverCreateRequest(CamelModel):
    driver_code: str = Field(..., alias="driverId", min_length=1, max_length=32)
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    auto_number: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    status: DriverStatus = DriverStatus.OFFLINE
    rating: Decimal = Field(Decimal("0.00"), ge=0, le=5)
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)

    @model_validator(mode="after")
    def _coordinates_come_in_pairs(self):
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be given together")
        return self


class DriverStatusUpdate(CamelModel):
    status: DriverStatus


class DriverLocationUpdate(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class FeedbackCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    student_id: Optional[str] = None
    type: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)


# ── Responses ─────────────────────────────────────────────────────────


class LocationResponse(CamelModel):
    key: str
    label: str


class FareEstimateResponse(CamelModel):
    base_fare: int
    distance_fare: int
    time_fare: int
    total: int
    shared_total: int
    distance: float
    estimated_time: int
    subtotal: int
    discount: int
    surcharge: int
    night_surcharge_applied: bool
    currency: str


class RideResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    driver_id: Optional[str] = None
    pickup_location: str
    drop_location: str
    passengers: int
    ride_type: RideType
    fare: Decimal
    status: RideStatus
    scheduled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class DriverResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    driver_code: str = Field(..., alias="driverId")
    name: str
    phone: str
    auto_number: str
    rating: Decimal
    status: DriverStatus
    lat: Optional[float] = None
    lng: Optional[float] = None
    created_at: Optional[datetime] = None


class FeedbackResponse(CamelModel):
    id: str
    name: str
    student_id: Optional[str] = None
    type: str
    message: str
    rating: Optional[int] = None
    created_at: Optional[datetime] = None


class AnalyticsResponse(CamelModel):
    active_students: int
    active_drivers: int
    daily_rides: int
    total_revenue: Decimal
    drivers: int
    rides: int
    avg_rating: float
    feedback_count: int
    rides_by_status: dict[str, int] = {}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
