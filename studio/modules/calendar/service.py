import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from fastapi import HTTPException
from studio.core.config import DEFAULT_CLASS_SESSION_MINUTES, GOOGLE_CALENDAR_TZ
from studio.core.errors import IntegrationFailure
from studio.core.intervals import add_minutes, all_day_window, overlaps, parse_datetime
from studio.modules.booking.repository import BookingRepository
from studio.modules.calendar.client import GoogleCalendarClient
from studio.modules.catalog.catalog import find_service
from studio.modules.clients.repository import ClientRepository
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.rooms.repository import RoomRepository


def normalize_event(event: Dict[str, Any], tz_name: str = "UTC") -> Optional[Dict[str, Any]]:
    """Remote event as {id, summary, start, end, is_all_day}, with all-day
    events stretched over whole days. None when the event has no usable window."""
    event_id = event.get("id")
    start_info = event.get("start") or {}
    end_info = event.get("end") or {}
    if not event_id or not isinstance(start_info, dict) or not isinstance(end_info, dict):
        return None

    try:
        if start_info.get("dateTime"):
            start = parse_datetime(start_info["dateTime"])
            end = parse_datetime(end_info.get("dateTime") or end_info.get("date"))
            is_all_day = False
        elif start_info.get("date"):
            end_day = date.fromisoformat(end_info["date"]) if end_info.get("date") else None
            start, end = all_day_window(date.fromisoformat(start_info["date"]), end_day, tz_name)
            is_all_day = True
        else:
            return None
    except (TypeError, ValueError):
        logging.warning(f"Skipping calendar event {event_id} with an unreadable window")
        return None

    if start is None or end is None:
        return None
    return {
        "id": event_id,
        "summary": event.get("summary"),
        "description": event.get("description"),
        "location": event.get("location"),
        "start": start,
        "end": end,
        "is_all_day": is_all_day,
    }


def _utc_iso(value: datetime) -> str:
    return value.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


class CalendarService:
    def __init__(
        self,
        calendar_client: GoogleCalendarClient,
        booking_repo: BookingRepository,
        room_repo: RoomRepository,
        equipment_repo: EquipmentRepository,
        client_repo: ClientRepository,
        timezone_label: str = GOOGLE_CALENDAR_TZ,
    ):
        self.calendar_client = calendar_client
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.equipment_repo = equipment_repo
        self.client_repo = client_repo
        self.timezone_label = timezone_label

    @property
    def configured(self) -> bool:
        return self.calendar_client.configured

    async def find_conflicts(
        self,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[str] = None,
        known_event_ids: Iterable[str] = (),
    ) -> List[Dict[str, Any]]:
        """Remote events that intersect [start, end).

        Events already mirrored from local bookings, and the mirror of the
        excluded booking, are not reported. A calendar that cannot be reached
        reports no conflicts.
        """
        if not self.configured:
            return []
        try:
            events = await self.calendar_client.list_events(start, end)
        except IntegrationFailure as e:
            logging.warning(f"Calendar availability check failed: {e}")
            return []

        ignored = set(known_event_ids)
        if exclude_booking_id:
            booking = await self.booking_repo.find_booking(exclude_booking_id)
            ref = (booking or {}).get("external_event_ref")
            if ref:
                ignored.add(ref["event_id"])

        conflicts = []
        for event in events:
            normalized = normalize_event(event, self.timezone_label)
            if normalized is None or normalized["id"] in ignored:
                continue
            if overlaps(start, end, normalized["start"], normalized["end"]):
                conflicts.append({key: normalized[key] for key in ("id", "summary", "start", "end")})
        return conflicts

    async def build_event(self, booking: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        start = booking.get("start_date")
        if start is None:
            return None
        end = booking.get("end_date") or add_minutes(start, DEFAULT_CLASS_SESSION_MINUTES)

        room_name = equipment_name = client_name = None
        if booking.get("room_id"):
            room = await self.room_repo.find_room(booking["room_id"])
            room_name = room and room.get("name")
        if booking.get("equipment_id"):
            equipment = await self.equipment_repo.find_equipment(booking["equipment_id"])
            equipment_name = equipment and equipment.get("name")
        if booking.get("client_id"):
            client = await self.client_repo.find_client(booking["client_id"])
            client_name = client and client.get("name")

        service = find_service(booking.get("service_code"))
        label = service.name if service else booking.get("service_type") or "Booking"
        if booking.get("service_type") == "room":
            summary = f"Room: {room_name or label}"
        elif booking.get("service_type") == "equipment":
            summary = f"Equipment: {equipment_name or label}"
        else:
            summary = label
        if client_name:
            summary = f"{summary} - {client_name}"

        lines = [f"Service category: {booking.get('service_type')}", f"Booking ID: {booking['id']}"]
        if service:
            lines.append(f"Service: {service.name}")
        if room_name:
            lines.append(f"Room: {room_name}")
        if equipment_name:
            lines.append(f"Equipment: {equipment_name}")
        if booking.get("total_fee") is not None:
            lines.append(f"Price: {booking['total_fee']} {booking.get('currency') or ''}".rstrip())

        details = {
            "summary": summary,
            "description": "\n".join(lines),
            "start": {"dateTime": _utc_iso(start), "timeZone": self.timezone_label},
            "end": {"dateTime": _utc_iso(end), "timeZone": self.timezone_label},
            "transparency": "opaque",
        }
        if room_name:
            details["location"] = room_name
        return details

    async def mirror_booking(self, booking: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Create or refresh the remote copy of a booking and return its ref."""
        if not self.configured:
            return None
        details = await self.build_event(booking)
        if details is None:
            return None

        ref = booking.get("external_event_ref")
        if ref:
            await self.calendar_client.update_event(ref["event_id"], details, ref.get("calendar_id"))
            return ref

        event_id = await self.calendar_client.create_event(details)
        if not event_id:
            return None
        ref = {"calendar_id": self.calendar_client.calendar_id, "event_id": event_id}
        await self.booking_repo.set_external_event_ref(booking["id"], ref)
        return ref

    async def remove_mirror(self, booking: Dict[str, Any], clear_ref: bool = True) -> bool:
        ref = booking.get("external_event_ref")
        if not ref or not self.configured:
            return False
        await self.calendar_client.delete_event(ref["event_id"], ref.get("calendar_id"))
        if clear_ref:
            await self.booking_repo.set_external_event_ref(booking["id"], None)
        return True

    async def list_events(self, start: datetime, end: datetime, room: Optional[str] = None):
        if not self.configured:
            return []
        try:
            events = await self.calendar_client.list_events(start, end)
        except IntegrationFailure as e:
            logging.error(f"Calendar listing failed: {e}")
            raise HTTPException(status_code=502, detail="Calendar is unavailable")

        normalized = [item for item in (normalize_event(event, self.timezone_label) for event in events) if item]
        if room:
            needle = room.lower()
            normalized = [
                item for item in normalized
                if any(needle in (item.get(field) or "").lower() for field in ("summary", "description", "location"))
            ]
        return normalized

    async def sync_bookings(self, start: datetime, end: datetime) -> Dict[str, Any]:
        """Mirror every scheduled booking in the window that has no remote copy yet."""
        if not self.configured:
            return {"configured": False, "mirrored": 0, "failed": 0}

        mirrored = failed = 0
        for booking in await self.booking_repo.find_unmirrored(start, end):
            try:
                if await self.mirror_booking(booking):
                    mirrored += 1
            except IntegrationFailure as e:
                failed += 1
                logging.warning(f"Calendar sync failed for booking {booking['id']}: {e}")
        return {"configured": True, "mirrored": mirrored, "failed": failed}
