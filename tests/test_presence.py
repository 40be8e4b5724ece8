"""Tests for the driver presence tracker."""

from decimal import Decimal

import pytest

from campus_rides.domain.enums import DriverStatus
from campus_rides.domain.errors import DriverNotFound, DuplicateDriver
from campus_rides.services.presence import DriverPresenceTracker


async def _register(tracker, code="A101", **extra):
    return await tracker.register_driver(
        driver_code=code,
        name="Sarah Mugisha",
        phone="+256 123 456 790",
        auto_number=code,
        **extra,
    )


@pytest.mark.asyncio
async def test_register_defaults(db_session):
    driver = await _register(DriverPresenceTracker(db_session))
    assert driver.status == "offline"
    assert driver.rating == Decimal("0.00")
    assert driver.lat is None and driver.lng is None
    assert driver.created_at is not None


@pytest.mark.asyncio
async def test_register_with_presence(db_session):
    driver = await _register(
        DriverPresenceTracker(db_session),
        status=DriverStatus.AVAILABLE,
        rating=4.9,
        lat=0.6123,
        lng=30.6453,
    )
    assert driver.status == "available"
    assert driver.rating == Decimal("4.9")
    assert float(driver.lat) == pytest.approx(0.6123)


@pytest.mark.asyncio
async def test_duplicate_code_rejected(db_session):
    tracker = DriverPresenceTracker(db_session)
    await _register(tracker)
    with pytest.raises(DuplicateDriver):
        await _register(tracker)


@pytest.mark.asyncio
async def test_any_status_may_follow_any_other(db_session):
    tracker = DriverPresenceTracker(db_session)
    driver = await _register(tracker)
    for status in ("on-ride", "offline", "available", "on-ride", "available"):
        driver = await tracker.update_status(driver.id, status)
        assert driver.status == status


@pytest.mark.asyncio
async def test_unknown_status_rejected(db_session):
    tracker = DriverPresenceTracker(db_session)
    driver = await _register(tracker)
    with pytest.raises(ValueError):
        await tracker.update_status(driver.id, "napping")


@pytest.mark.asyncio
async def test_location_overwrites_both_coordinates(db_session):
    tracker = DriverPresenceTracker(db_session)
    driver = await _register(tracker)
    driver = await tracker.update_location(driver.id, 0.6103, 30.6463)
    driver = await tracker.update_location(driver.id, 0.6143, 30.6483)
    assert float(driver.lat) == pytest.approx(0.6143)
    assert float(driver.lng) == pytest.approx(30.6483)
    # status is independent of location
    assert driver.status == "offline"


@pytest.mark.asyncio
async def test_missing_driver(db_session):
    tracker = DriverPresenceTracker(db_session)
    await _register(tracker)
    with pytest.raises(DriverNotFound):
        await tracker.update_status("ghost", "available")
    with pytest.raises(DriverNotFound):
        await tracker.update_location("ghost", 0.0, 0.0)
    with pytest.raises(DriverNotFound):
        await tracker.get_driver("ghost")
    assert [d.status for d in await tracker.list_drivers()] == ["offline"]


@pytest.mark.asyncio
async def test_lookup_by_code_and_status_filter(db_session):
    tracker = DriverPresenceTracker(db_session)
    a101 = await _register(tracker, "A101", status="available")
    await _register(tracker, "A205")
    assert (await tracker.get_by_code("A101")).id == a101.id
    assert [d.id for d in await tracker.list_drivers("available")] == [a101.id]
    with pytest.raises(DriverNotFound):
        await tracker.get_by_code("Z999")
