from datetime import datetime
from typing import Any, Dict, List, Optional
from studio.core.config import BOOKING_BUFFER_MINUTES
from studio.core.intervals import buffered_window, overlaps
from studio.modules.booking.repository import RESOURCE_FIELDS, BookingRepository


class ResourceConflictChecker:
    """
    Finds active bookings that hold the same room or piece of equipment
    during a candidate interval.

    Only room and equipment kinds are exclusive. Class sessions and generic
    services never conflict here; the room bookings a class generates do.
    """

    def __init__(self, booking_repo: BookingRepository, buffer_minutes: float = BOOKING_BUFFER_MINUTES):
        if buffer_minutes < 0:
            raise ValueError("buffer_minutes cannot be negative")
        self.booking_repo = booking_repo
        self.buffer_minutes = buffer_minutes

    @staticmethod
    def is_exclusive(service_type: Optional[str]) -> bool:
        return service_type in RESOURCE_FIELDS

    async def find_conflicts(
        self,
        service_type: str,
        resource_id: Optional[str],
        start: Optional[datetime],
        end: Optional[datetime],
        exclude_booking_id: Optional[str] = None,
        exclude_class_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        if not self.is_exclusive(service_type) or not resource_id or start is None or end is None:
            return []

        window_start, window_end = buffered_window(start, end, self.buffer_minutes)
        candidates = await self.booking_repo.find_overlapping(
            service_type,
            resource_id,
            window_start,
            window_end,
            exclude_booking_id=exclude_booking_id,
            exclude_class_id=exclude_class_id,
        )
        # Store range scan first, then the exact half-open test.
        return [
            booking for booking in candidates
            if overlaps(start, end, booking["start_date"], booking["end_date"], self.buffer_minutes)
        ]

    async def find_conflict(self, *args, **kwargs) -> Optional[Dict[str, Any]]:
        """The first conflicting booking, or None."""
        conflicts = await self.find_conflicts(*args, **kwargs)
        return conflicts[0] if conflicts else None
