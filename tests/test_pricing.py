"""Unit tests for the campus fare calculator."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from campus_rides.config import Settings
from campus_rides.domain.distance import DistanceTable
from campus_rides.domain.pricing import (
    FareCalculator,
    NightSurcharge,
    StudentDiscount,
    is_night_time,
    round_half_up,
)


class TestAdjustments:
    def test_student_discount_always_applies(self):
        discount = StudentDiscount(0.10)
        assert discount.applies(None)
        assert discount.applies(datetime(2026, 1, 1, 12, 0))
        assert discount.apply(Decimal("28")) == Decimal("25.20")

    def test_night_surcharge_needs_a_scheduled_time(self):
        assert not NightSurcharge(0.25).applies(None)

    @pytest.mark.parametrize("hour", [22, 23, 0, 3, 5])
    def test_night_hours(self, hour):
        assert is_night_time(datetime(2026, 1, 1, hour, 30))

    @pytest.mark.parametrize("hour", [6, 7, 12, 18, 21])
    def test_day_hours(self, hour):
        assert not is_night_time(datetime(2026, 1, 1, hour, 0))

    def test_window_that_does_not_wrap_midnight(self):
        assert is_night_time(datetime(2026, 1, 1, 2, 0), start_hour=1, end_hour=4)
        assert not is_night_time(datetime(2026, 1, 1, 4, 0), start_hour=1, end_hour=4)

    def test_aware_time_is_converted_to_local_zone(self):
        # 20:00 UTC is 23:00 in Kampala (UTC+3)
        surcharge = NightSurcharge(0.25, timezone="Africa/Kampala")
        assert surcharge.applies(datetime(2026, 1, 1, 20, 0, tzinfo=timezone.utc))
        # 04:00 UTC is 07:00 in Kampala
        assert not surcharge.applies(datetime(2026, 1, 1, 4, 0, tzinfo=timezone.utc))

    def test_naive_time_is_taken_as_local(self):
        surcharge = NightSurcharge(0.25, timezone="Africa/Kampala")
        assert surcharge.applies(datetime(2026, 1, 1, 23, 0))

    def test_round_half_up(self):
        assert round_half_up(Decimal("31.5")) == 32
        assert round_half_up(Decimal("6.25")) == 6
        assert round_half_up(Decimal("2.5")) == 3


class TestFareCalculator:
    def test_library_to_hostels(self, calculator):
        fare = calculator.calculate("library", "hostels")
        assert fare.distance == 1.2
        assert fare.estimated_time == 4  # ceil(1.2 * 3.2)
        assert fare.total == 25  # (20 + 0 + 8) * 0.9 = 25.2
        assert fare.shared_total == 25
        assert fare.night_surcharge_applied is False

    def test_itemised_fields_are_discounted_separately(self, calculator):
        fare = calculator.calculate("library", "hostels")
        assert fare.base_fare == 18  # 20 * 0.9
        assert fare.distance_fare == 0
        assert fare.time_fare == 7  # 8 * 0.9 = 7.2
        assert fare.subtotal == 28
        assert fare.discount == 3  # 2.8
        assert fare.surcharge == 0

    def test_shared_ride_divides_total(self, calculator):
        fare = calculator.calculate("library", "hostels", passengers=4)
        assert fare.total == 25
        assert fare.shared_total == 6  # round(25 / 4)

    @pytest.mark.parametrize("passengers", [0, -3])
    def test_non_positive_passengers_priced_as_one(self, calculator, passengers):
        fare = calculator.calculate("library", "hostels", passengers=passengers)
        assert fare.shared_total == fare.total == 25

    @pytest.mark.parametrize("passengers", [1, 2, 3, 5, 7])
    def test_shared_total_is_rounded_quotient(self, calculator, passengers):
        fare = calculator.calculate("main-gate", "mbarara-town", passengers=passengers)
        assert fare.shared_total == round_half_up(Decimal(fare.total) / passengers)

    def test_night_surcharge_at_23h(self, calculator):
        fare = calculator.calculate(
            "library", "hostels", scheduled_time=datetime(2026, 3, 1, 23, 0)
        )
        assert fare.total == 32  # 25.2 * 1.25 = 31.5, half-up
        assert fare.surcharge == 6  # 6.3
        assert fare.night_surcharge_applied is True

    def test_daytime_schedule_has_no_surcharge(self, calculator):
        day = calculator.calculate(
            "library", "hostels", scheduled_time=datetime(2026, 3, 1, 14, 0)
        )
        assert day == calculator.calculate("library", "hostels")

    def test_short_trip_has_no_distance_fare(self, calculator):
        for destination in ("library", "dining-hall", "admin-block"):
            assert calculator.calculate("main-gate", destination).distance_fare == 0

    def test_long_trip_charges_per_km_beyond_two(self, calculator):
        fare = calculator.calculate("main-gate", "mbarara-town")
        # distance 5.2 -> (3.2 * 8) = 25.6, time ceil(16.64) = 17 -> 34
        # (20 + 25.6 + 34) * 0.9 = 71.64
        assert fare.estimated_time == 17
        assert fare.distance_fare == 23  # 25.6 * 0.9 = 23.04
        assert fare.total == 72

    def test_unknown_locations_use_default_distance(self, calculator):
        fare = calculator.calculate("nowhere", "elsewhere")
        assert fare.distance == 3.2
        assert fare.estimated_time == 11  # ceil(10.24)

    def test_idempotent(self, calculator):
        when = datetime(2026, 3, 1, 22, 15)
        first = calculator.calculate("hostels", "hospital", 3, when)
        second = calculator.calculate("hostels", "hospital", 3, when)
        assert first == second

    def test_custom_distance_table(self):
        calc = FareCalculator(
            base_fare=20,
            per_km_rate=8,
            per_minute_rate=2,
            distances=DistanceTable({"a": {"b": 10.0}}, default_km=1.0),
        )
        assert calc.calculate("a", "b").distance == 10.0
        assert calc.calculate("b", "a").distance == 1.0


class TestFromSettings:
    def test_campus_defaults(self):
        calc = FareCalculator.from_settings(Settings())
        fare = calc.calculate("library", "hostels")
        # (2000 + 0 + 4 * 50) * 0.9
        assert fare.total == 1980

    def test_default_distance_follows_settings(self):
        calc = FareCalculator.from_settings(Settings(default_distance_km=1.0))
        assert calc.calculate("nowhere", "elsewhere").distance == 1.0
        assert calc.calculate("library", "hostels").distance == 1.2
