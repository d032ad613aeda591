"""
Class session synchronizer
Keeps the room bookings tagged with a class in step with its schedule: one
booking per session start, in the class's room. Sessions that collide with
another booking of the room are skipped and reported, never forced.
"""
import logging
from typing import Any, Dict, List, Optional
from studio.core.config import BOOKING_BUFFER_MINUTES, DEFAULT_CLASS_SESSION_MINUTES
from studio.core.intervals import add_minutes, normalize_datetime
from studio.core.locks import ResourceLocks, resource_locks
from studio.modules.booking.conflicts import ResourceConflictChecker
from studio.modules.booking.effects import PostCommitEffect, run_post_commit
from studio.modules.booking.models import Booking, BookingStatus, PaymentStatus
from studio.modules.booking.repository import BookingRepository
from studio.modules.calendar.service import CalendarService


class ClassSessionSynchronizer:
    def __init__(
        self,
        booking_repo: BookingRepository,
        locks: ResourceLocks = resource_locks,
        buffer_minutes: float = BOOKING_BUFFER_MINUTES,
        default_session_minutes: int = DEFAULT_CLASS_SESSION_MINUTES,
        calendar_service: Optional[CalendarService] = None,
    ):
        self.booking_repo = booking_repo
        self.calendar_service = calendar_service
        self.locks = locks
        self.default_session_minutes = default_session_minutes
        self.conflict_checker = ResourceConflictChecker(booking_repo, buffer_minutes)

    def session_minutes(self, studio_class: Dict[str, Any]) -> int:
        minutes = studio_class.get("session_length_minutes")
        if isinstance(minutes, (int, float)) and minutes > 0:
            return minutes
        return self.default_session_minutes

    async def _remove(self, bookings: List[Dict[str, Any]]) -> int:
        removed = await self.booking_repo.delete_bookings(booking["id"] for booking in bookings)
        if self.calendar_service is None:
            return removed
        for booking in bookings:
            if booking.get("external_event_ref"):
                await run_post_commit(booking["id"], [PostCommitEffect(
                    "calendar",
                    lambda booking=booking: self.calendar_service.remove_mirror(booking, clear_ref=False),
                )])
        return removed

    async def remove_sessions(self, class_id: str) -> int:
        """Delete every room booking of the class along with its calendar mirror."""
        return await self._remove(await self.booking_repo.find_class_bookings(class_id))

    async def sync(self, studio_class: Dict[str, Any]) -> Dict[str, int]:
        """Bring the class's room bookings in line with its schedule.

        Returns the tally {created, removed, skipped}. Running it again with
        the same class changes nothing.
        """
        class_id = studio_class["id"]
        room_id = studio_class.get("room_id")
        schedule = studio_class.get("schedule") or []
        existing = await self.booking_repo.find_class_bookings(class_id)

        if not room_id or not schedule:
            removed = await self._remove(existing)
            return {"created": 0, "removed": removed, "skipped": 0}

        length = self.session_minutes(studio_class)
        starts = sorted({normalize_datetime(start) for start in schedule})
        desired = set(starts)

        stale = [
            booking for booking in existing
            if booking.get("start_date") not in desired or booking.get("room_id") != room_id
        ]
        removed = await self._remove(stale)
        stale_ids = {booking["id"] for booking in stale}
        backed = {booking["start_date"] for booking in existing if booking["id"] not in stale_ids}

        created = skipped = 0
        for start in starts:
            if start in backed:
                continue
            end = add_minutes(start, length)
            async with self.locks.hold("room", room_id):
                conflict = await self.conflict_checker.find_conflict(
                    "room", room_id, start, end, exclude_class_id=class_id
                )
                if conflict:
                    skipped += 1
                    logging.info(f"Class {class_id} session at {start} skipped, room held by booking {conflict['id']}")
                    continue
                await self.booking_repo.add_booking(Booking(
                    service_type="room",
                    class_id=class_id,
                    room_id=room_id,
                    start_date=start,
                    end_date=end,
                    status=BookingStatus.scheduled,
                    payment_status=PaymentStatus.unpaid,
                ))
                created += 1

        return {"created": created, "removed": removed, "skipped": skipped}
