"""
Ride lifecycle state machine.

    requested -> accepted -> in-progress -> completed
        |            |
        +------------+--> cancelled

``completed`` and ``cancelled`` are terminal.  Writing the current status
again is not a transition and is rejected like any other illegal edge.
"""

from __future__ import annotations

from .enums import RIDE_TRANSITIONS, RideStatus
from .errors import InvalidStateTransition


def is_terminal(status: RideStatus | str) -> bool:
    return not RIDE_TRANSITIONS[RideStatus(status)]


def transition(current: RideStatus | str, requested: RideStatus | str) -> RideStatus:
    """Return *requested* as a ``RideStatus`` if the edge is legal, else raise."""
    current, requested = RideStatus(current), RideStatus(requested)
    if requested not in RIDE_TRANSITIONS[current]:
        raise InvalidStateTransition(current.value, requested.value)
    return requested
