"""
Redis pub/sub publisher for ride and driver lifecycle events.

This is the seam for the external notifier: the API publishes one JSON
message per successful mutation and never waits on subscribers.  A
publish failure is logged and does not fail the request that caused it.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

RIDE_CREATED = "ride.created"
RIDE_STATUS_CHANGED = "ride.status_changed"
DRIVER_STATUS_CHANGED = "driver.status_changed"
DRIVER_LOCATION_UPDATED = "driver.location_updated"


class EventPublisher:
    def __init__(
        self,
        client: Optional[aioredis.Redis],
        channel: str,
        enabled: bool = True,
    ):
        self.redis = client
        self.channel = channel
        self.enabled = enabled and client is not None

    async def publish(self, event: str, payload: dict[str, Any]) -> bool:
        """Publish *event*; returns False when disabled or Redis is down."""
        if not self.enabled:
            return False
        message = json.dumps(
            {
                "event": event,
                "at": datetime.now(timezone.utc).isoformat(),
                "data": payload,
            },
            default=str,
        )
        try:
            await self.redis.publish(self.channel, message)
        except RedisError as exc:
            logger.warning("Failed to publish %s on %s: %s", event, self.channel, exc)
            return False
        return True
