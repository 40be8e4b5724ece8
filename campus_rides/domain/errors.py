"""Domain exceptions.  The API layer maps each family to an HTTP status."""

from __future__ import annotations


class CampusRidesError(Exception):
    """Base class for every error raised by the core."""


class NotFound(CampusRidesError):
    entity = "Record"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"{self.entity} not found: {record_id}")


class RideNotFound(NotFound):
    entity = "Ride"


class DriverNotFound(NotFound):
    entity = "Driver"


class InvalidStateTransition(CampusRidesError):
    """Raised when a ride status change violates the state machine."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot transition from {current} to {requested}")


class DuplicateDriver(CampusRidesError):
    def __init__(self, driver_code: str):
        self.driver_code = driver_code
        super().__init__(f"Driver code already registered: {driver_code}")
