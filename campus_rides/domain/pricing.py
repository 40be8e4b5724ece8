"""
Campus Fare Calculator  (Strategy Pattern for adjustments)
==========================================================

Formula
-------
  distance       = table lookup (default 3.2 km)
  estimated_time = ceil(distance x MINUTES_PER_KM)
  subtotal       = BASE_FARE
                   + max(distance - FREE_KM, 0) x PER_KM_RATE
                   + estimated_time x PER_MINUTE_RATE
  total          = round(subtotal x (1 - STUDENT_DISCOUNT) [x (1 + NIGHT_SURCHARGE)])
  shared_total   = round(total / max(passengers, 1))

* The student discount is applied to every booking; there is no rider
  role check.
* The night surcharge applies when the scheduled time's local hour is in
  ``[night_start_hour, night_end_hour)``, wrapping midnight.
* The itemised ``base_fare`` / ``distance_fare`` / ``time_fare`` are each
  discounted and rounded on their own.  They are for display and need not
  sum to ``total``.

All arithmetic is done in ``Decimal`` and every rounding is half-up, so the
same inputs always give the same integer amounts.

Complexity: O(1) per estimate.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from zoneinfo import ZoneInfo

from .distance import CAMPUS_DISTANCES, DistanceTable, campus_distances

_ONE = Decimal(1)
_ZERO = Decimal(0)


def _dec(value: float | int | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_half_up(amount: Decimal) -> int:
    return int(amount.quantize(_ONE, rounding=ROUND_HALF_UP))


def local_hour(moment: datetime, tz: Optional[tzinfo] = None) -> int:
    """Naive datetimes are already local wall-clock time."""
    if moment.tzinfo is None or tz is None:
        return moment.hour
    return moment.astimezone(tz).hour


def is_night_time(
    moment: datetime,
    start_hour: int = 22,
    end_hour: int = 6,
    tz: Optional[tzinfo] = None,
) -> bool:
    hour = local_hour(moment, tz)
    if start_hour > end_hour:
        return hour >= start_hour or hour < end_hour
    return start_hour <= hour < end_hour


# ── Value Object ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class FareEstimate:
    base_fare: int
    distance_fare: int
    time_fare: int
    total: int
    shared_total: int
    distance: float
    estimated_time: int
    subtotal: int = 0
    discount: int = 0
    surcharge: int = 0
    night_surcharge_applied: bool = False


# ── Adjustment strategies ─────────────────────────────────────────────


class FareAdjustment(ABC):
    def __init__(self, rate: float | Decimal):
        self.rate = _dec(rate)

    @abstractmethod
    def applies(self, scheduled_time: Optional[datetime]) -> bool: ...

    @abstractmethod
    def apply(self, amount: Decimal) -> Decimal: ...


class StudentDiscount(FareAdjustment):
    def applies(self, scheduled_time: Optional[datetime]) -> bool:
        return True

    def apply(self, amount: Decimal) -> Decimal:
        return amount * (_ONE - self.rate)


class NightSurcharge(FareAdjustment):
    def __init__(
        self,
        rate: float | Decimal,
        start_hour: int = 22,
        end_hour: int = 6,
        timezone: Optional[str] = None,
    ):
        super().__init__(rate)
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.tz = ZoneInfo(timezone) if timezone else None

    def applies(self, scheduled_time: Optional[datetime]) -> bool:
        if scheduled_time is None:
            return False
        return is_night_time(scheduled_time, self.start_hour, self.end_hour, self.tz)

    def apply(self, amount: Decimal) -> Decimal:
        return amount * (_ONE + self.rate)


# ── Calculator facade ─────────────────────────────────────────────────


class FareCalculator:
    """High-level API used by the estimate endpoint and ride booking."""

    def __init__(
        self,
        base_fare: float = 2000.0,
        per_km_rate: float = 500.0,
        per_minute_rate: float = 50.0,
        *,
        student_discount: float = 0.10,
        night_surcharge: float = 0.25,
        night_start_hour: int = 22,
        night_end_hour: int = 6,
        timezone: Optional[str] = None,
        free_km: float = 2.0,
        minutes_per_km: float = 3.2,
        distances: DistanceTable = campus_distances,
    ):
        self.base_fare = _dec(base_fare)
        self.per_km_rate = _dec(per_km_rate)
        self.per_minute_rate = _dec(per_minute_rate)
        self.free_km = _dec(free_km)
        self.minutes_per_km = _dec(minutes_per_km)
        self.discount = StudentDiscount(student_discount)
        self.surcharge = NightSurcharge(
            night_surcharge, night_start_hour, night_end_hour, timezone
        )
        self.distances = distances

    @classmethod
    def from_settings(cls, settings, distances: Optional[DistanceTable] = None):
        return cls(
            settings.base_fare,
            settings.per_km_rate,
            settings.per_minute_rate,
            student_discount=settings.student_discount,
            night_surcharge=settings.night_surcharge,
            night_start_hour=settings.night_start_hour,
            night_end_hour=settings.night_end_hour,
            timezone=settings.timezone,
            free_km=settings.free_km,
            minutes_per_km=settings.minutes_per_km,
            distances=distances
            or DistanceTable(CAMPUS_DISTANCES, settings.default_distance_km),
        )

    def calculate(
        self,
        origin: str,
        destination: str,
        passengers: int = 1,
        scheduled_time: Optional[datetime] = None,
    ) -> FareEstimate:
        distance_km = self.distances.resolve(origin, destination)
        distance = _dec(distance_km)
        estimated_time = math.ceil(distance * self.minutes_per_km)

        base = self.base_fare
        distance_fare = max(distance - self.free_km, _ZERO) * self.per_km_rate
        time_fare = estimated_time * self.per_minute_rate
        subtotal = base + distance_fare + time_fare

        discounted = self.discount.apply(subtotal)
        amount = discounted
        night = self.surcharge.applies(scheduled_time)
        if night:
            amount = self.surcharge.apply(discounted)

        total = round_half_up(amount)
        return FareEstimate(
            base_fare=round_half_up(self.discount.apply(base)),
            distance_fare=round_half_up(self.discount.apply(distance_fare)),
            time_fare=round_half_up(self.discount.apply(time_fare)),
            total=total,
            shared_total=round_half_up(Decimal(total) / max(passengers, 1)),
            distance=distance_km,
            estimated_time=estimated_time,
            subtotal=round_half_up(subtotal),
            discount=round_half_up(subtotal - discounted),
            surcharge=round_half_up(amount - discounted),
            night_surcharge_applied=night,
        )

