"""Unit tests for the campus distance table."""

import pytest

from campus_rides.domain.distance import (
    CAMPUS_DISTANCES,
    CAMPUS_LOCATIONS,
    DEFAULT_DISTANCE_KM,
    DistanceTable,
    resolve_distance,
)


class TestResolveDistance:
    @pytest.mark.parametrize(
        "origin,destination,km",
        [
            (origin, destination, km)
            for origin, legs in CAMPUS_DISTANCES.items()
            for destination, km in legs.items()
        ],
    )
    def test_configured_pairs_return_their_value(self, origin, destination, km):
        assert resolve_distance(origin, destination) == km

    def test_missing_reverse_leg_uses_default(self):
        # main-gate -> sports-complex is listed, the reverse is not
        assert resolve_distance("main-gate", "sports-complex") == 2.8
        assert resolve_distance("sports-complex", "main-gate") == DEFAULT_DISTANCE_KM

    def test_unknown_origin(self):
        assert resolve_distance("stadium", "library") == 3.2

    def test_unknown_destination(self):
        assert resolve_distance("library", "stadium") == 3.2

    def test_same_location_is_not_in_table(self):
        assert resolve_distance("library", "library") == 3.2

    def test_every_origin_is_a_campus_location(self):
        keys = {loc.key for loc in CAMPUS_LOCATIONS}
        assert set(CAMPUS_DISTANCES) <= keys
        for legs in CAMPUS_DISTANCES.values():
            assert set(legs) <= keys


class TestDistanceTable:
    def test_lookup_is_directional(self):
        table = DistanceTable({"a": {"b": 1.0}, "b": {"a": 2.5}})
        assert table.resolve("a", "b") == 1.0
        assert table.resolve("b", "a") == 2.5

    def test_custom_default(self):
        table = DistanceTable({}, default_km=7.0)
        assert table.resolve("x", "y") == 7.0

    def test_contains(self):
        table = DistanceTable({"a": {"b": 1.0}})
        assert ("a", "b") in table
        assert ("b", "a") not in table

    def test_negative_distance_rejected(self):
        with pytest.raises(ValueError):
            DistanceTable({"a": {"b": -1.0}})

    def test_negative_default_rejected(self):
        with pytest.raises(ValueError):
            DistanceTable({}, default_km=-0.5)
