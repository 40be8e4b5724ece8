"""
Admin analytics -- aggregates read across drivers, rides and feedback.

Pure functions over already-loaded records; the admin route loads the
three tables and hands them over.  Revenue is the sum of every ride's
frozen fare, whatever its status.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from campus_rides.domain.enums import DriverStatus


@dataclass(frozen=True)
class AnalyticsSummary:
    active_students: int
    active_drivers: int
    daily_rides: int
    total_revenue: Decimal
    drivers: int
    rides: int
    avg_rating: float
    feedback_count: int
    rides_by_status: dict[str, int] = field(default_factory=dict)


def _local_date(moment: Optional[datetime], tz: Optional[tzinfo]) -> Optional[date]:
    if moment is None:
        return None
    if moment.tzinfo is None:
        # stored as UTC; some backends drop the offset on read
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date() if tz else moment.date()


def summarize(
    drivers: Iterable,
    rides: Iterable,
    feedback: Iterable = (),
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> AnalyticsSummary:
    drivers, rides, feedback = list(drivers), list(rides), list(feedback)
    if today is None:
        today = datetime.now(tz or timezone.utc).date()

    ratings = [Decimal(str(d.rating or 0)) for d in drivers]
    avg_rating = (
        (sum(ratings) / len(ratings)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        if ratings
        else Decimal("0.0")
    )

    return AnalyticsSummary(
        active_students=len({r.user_id for r in rides if r.user_id is not None}),
        active_drivers=sum(
            1 for d in drivers if d.status != DriverStatus.OFFLINE.value
        ),
        daily_rides=sum(1 for r in rides if _local_date(r.created_at, tz) == today),
        total_revenue=sum(
            (Decimal(str(r.fare)) for r in rides), Decimal("0.00")
        ).quantize(Decimal("0.01")),
        drivers=len(drivers),
        rides=len(rides),
        avg_rating=float(avg_rating),
        feedback_count=len(feedback),
        rides_by_status=dict(Counter(r.status for r in rides)),
    )
