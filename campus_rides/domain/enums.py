"""Domain enumerations and state-transition rules."""

import enum


class RideStatus(str, enum.Enum):
    REQUESTED = "requested"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# State machine: maps current status -> set of valid next statuses
RIDE_TRANSITIONS: dict[RideStatus, set[RideStatus]] = {
    RideStatus.REQUESTED: {RideStatus.ACCEPTED, RideStatus.CANCELLED},
    RideStatus.ACCEPTED: {RideStatus.IN_PROGRESS, RideStatus.CANCELLED},
    RideStatus.IN_PROGRESS: {RideStatus.COMPLETED},
    RideStatus.COMPLETED: set(),
    RideStatus.CANCELLED: set(),
}

# Statuses in which a driver is bound to the ride
ACTIVE_RIDE_STATUSES = frozenset({RideStatus.ACCEPTED, RideStatus.IN_PROGRESS})


class RideType(str, enum.Enum):
    SINGLE = "single"
    SHARED = "shared"


class DriverStatus(str, enum.Enum):
    AVAILABLE = "available"
    ON_RIDE = "on-ride"
    OFFLINE = "offline"
