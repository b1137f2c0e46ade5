"""
Heartbeat domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from heartbeats.domain.heartbeat import Heartbeat


class SeatTracker:
    """Domain service computing active seats from heartbeats."""

    @staticmethod
    def is_active(heartbeat: Heartbeat, timeout_minutes: int, now: datetime) -> bool:
        """
        Check whether a heartbeat still holds a seat.

        Args:
            heartbeat: Heartbeat to check
            timeout_minutes: Minutes of inactivity before a seat is released
            now: Reference time

        Returns:
            True if ``now - last_beat_at`` is within the timeout
        """
        return now - heartbeat.last_beat_at <= timedelta(minutes=timeout_minutes)

    @staticmethod
    def active_seats(
        heartbeats: Iterable[Heartbeat], timeout_minutes: int, now: datetime
    ) -> List[Heartbeat]:
        """
        Filter heartbeats down to the ones holding a seat.

        Pure: stale heartbeats are left untouched, only excluded.

        Args:
            heartbeats: Heartbeats of one license
            timeout_minutes: Minutes of inactivity before a seat is released
            now: Reference time

        Returns:
            Active heartbeats
        """
        return [hb for hb in heartbeats if SeatTracker.is_active(hb, timeout_minutes, now)]

    @staticmethod
    def can_take_seat(
        heartbeats: Iterable[Heartbeat],
        seats: int,
        client_identifier: Optional[str],
        timeout_minutes: int,
        now: datetime,
    ) -> bool:
        """
        Decide whether a client may hold a seat on a license.

        A client that already holds an active seat may always renew it. Any
        other client (including an anonymous one) needs a free seat.

        Args:
            heartbeats: Heartbeats of the license
            seats: Seat limit of the license
            client_identifier: Identifier of the calling client, if any
            timeout_minutes: Minutes of inactivity before a seat is released
            now: Reference time

        Returns:
            True if the client is admitted
        """
        active = SeatTracker.active_seats(heartbeats, timeout_minutes, now)
        if client_identifier is not None and any(
            hb.client_identifier == client_identifier for hb in active
        ):
            return True
        return len(active) < seats
