"""Unit tests for the admin analytics aggregate."""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from campus_rides.services.analytics import summarize

KAMPALA = ZoneInfo("Africa/Kampala")


def _driver(status, rating="0.00"):
    return SimpleNamespace(status=status, rating=Decimal(rating))


def _ride(fare, status="requested", user_id=None, created_at=None):
    return SimpleNamespace(
        fare=Decimal(fare), status=status, user_id=user_id, created_at=created_at
    )


class TestSummarize:
    def test_empty(self):
        summary = summarize([], [], [], today=date(2026, 3, 1))
        assert summary.drivers == summary.rides == 0
        assert summary.total_revenue == Decimal("0.00")
        assert summary.avg_rating == 0.0
        assert summary.rides_by_status == {}

    def test_counts_and_revenue(self):
        drivers = [
            _driver("available", "4.8"),
            _driver("on-ride", "4.9"),
            _driver("offline", "4.7"),
        ]
        rides = [
            _ride("1980", "completed", "u1"),
            _ride("4005", "requested", "u2"),
            _ride("2475", "cancelled", "u1"),
            _ride("1980", "requested"),
        ]
        summary = summarize(drivers, rides, ["great"], today=date(2026, 3, 1))
        assert summary.active_drivers == 2
        assert summary.drivers == 3
        assert summary.rides == 4
        assert summary.active_students == 2
        assert summary.total_revenue == Decimal("10440.00")
        assert summary.avg_rating == 4.8
        assert summary.feedback_count == 1
        assert summary.rides_by_status == {"completed": 1, "requested": 2, "cancelled": 1}

    def test_daily_rides_use_local_date(self):
        rides = [
            # 22:30 UTC on 28 Feb is 01:30 on 1 Mar in Kampala
            _ride("10", created_at=datetime(2026, 2, 28, 22, 30, tzinfo=timezone.utc)),
            # naive values are read back as UTC
            _ride("10", created_at=datetime(2026, 3, 1, 9, 0)),
            _ride("10", created_at=datetime(2026, 2, 27, 9, 0, tzinfo=timezone.utc)),
            _ride("10", created_at=None),
        ]
        summary = summarize([], rides, today=date(2026, 3, 1), tz=KAMPALA)
        assert summary.daily_rides == 2
