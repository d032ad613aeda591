import logging
from contextlib import nullcontext
from datetime import datetime
from typing import Any, Dict, List, Optional
from studio.core.config import BOOKING_BUFFER_MINUTES
from studio.core.errors import ConflictError, NotFoundError, ValidationError
from studio.core.locks import ResourceLocks, resource_locks
from studio.modules.attendance.repository import AttendanceRepository
from studio.modules.booking.conflicts import ResourceConflictChecker
from studio.modules.booking.effects import PostCommitEffect, run_post_commit
from studio.modules.booking.models import Booking, BookingStatus, TERMINAL_STATUSES
from studio.modules.booking.repository import RESOURCE_FIELDS, BookingRepository
from studio.modules.booking.schemas import BookingUpdate, parse_booking_request
from studio.modules.booking.validation import resolve_booking
from studio.modules.calendar.service import CalendarService
from studio.modules.classes.repository import ClassRepository
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.payments.reconciliation import PaymentReconciler
from studio.modules.rooms.repository import RoomRepository

# Stored fields that make up a booking request.
REQUEST_FIELDS = (
    "service_type", "service_code", "client_id", "staff_id", "room_id", "equipment_id",
    "class_id", "start_date", "end_date", "status", "payment_status", "full_price",
    "discounted_price", "currency", "add_ons", "price_notes",
)
# A change to any of these moves the booking in time or onto another resource.
SCHEDULE_FIELDS = ("service_type", "room_id", "equipment_id", "start_date", "end_date")


def _resource_id(booking: Dict[str, Any]) -> Optional[str]:
    field = RESOURCE_FIELDS.get(booking.get("service_type"))
    return booking.get(field) if field else None


def _held_equipment(booking: Dict[str, Any]) -> Optional[str]:
    """Equipment a booking currently has out, if any."""
    if booking.get("service_type") == "equipment" and booking.get("status") == BookingStatus.scheduled.value:
        return booking.get("equipment_id")
    return None


def _is_class_session(booking: Dict[str, Any]) -> bool:
    return booking.get("service_type") == "room" and bool(booking.get("class_id"))


class BookingService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        room_repo: RoomRepository,
        equipment_repo: EquipmentRepository,
        class_repo: ClassRepository,
        attendance_repo: AttendanceRepository,
        calendar_service: CalendarService,
        reconciler: PaymentReconciler,
        locks: ResourceLocks = resource_locks,
        buffer_minutes: float = BOOKING_BUFFER_MINUTES,
    ):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.equipment_repo = equipment_repo
        self.class_repo = class_repo
        self.attendance_repo = attendance_repo
        self.calendar_service = calendar_service
        self.reconciler = reconciler
        self.locks = locks
        self.conflict_checker = ResourceConflictChecker(booking_repo, buffer_minutes)

    def _resource_lock(self, booking: Dict[str, Any]):
        resource_id = _resource_id(booking)
        if not resource_id:
            return nullcontext()
        return self.locks.hold(booking["service_type"], resource_id)

    async def _check_references(self, fields: Dict[str, Any]):
        if fields.get("room_id") and not await self.room_repo.find_room(fields["room_id"]):
            raise NotFoundError("Room not found")
        if fields.get("equipment_id") and not await self.equipment_repo.find_equipment(fields["equipment_id"]):
            raise NotFoundError("Equipment not found")
        if fields.get("class_id") and not await self.class_repo.find_class(fields["class_id"]):
            raise NotFoundError("Class not found")

    async def _external_conflicts(
        self,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[str] = None,
        local_conflicts: Optional[List[Dict[str, Any]]] = None,
    ):
        known = set(await self.booking_repo.find_linked_event_ids(start, end))
        for booking in local_conflicts or []:
            if booking.get("external_event_ref"):
                known.add(booking["external_event_ref"]["event_id"])
        return await self.calendar_service.find_conflicts(start, end, exclude_booking_id, known)

    async def _check_conflicts(self, fields: Dict[str, Any], exclude_booking_id: Optional[str] = None):
        start, end = fields.get("start_date"), fields.get("end_date")
        conflict = await self.conflict_checker.find_conflict(
            fields["service_type"], _resource_id(fields), start, end, exclude_booking_id=exclude_booking_id
        )
        if conflict:
            label = "Room" if fields["service_type"] == "room" else "Equipment"
            raise ConflictError(f"{label} is already booked for the selected time range", [conflict])

        if start is not None and end is not None:
            external = await self._external_conflicts(start, end, exclude_booking_id)
            if external:
                raise ConflictError("Selected time conflicts with existing calendar events", external)

    def _create_effects(self, booking: Dict[str, Any]) -> List[PostCommitEffect]:
        effects = []
        if booking.get("client_id") and booking.get("start_date"):
            effects.append(PostCommitEffect(
                "attendance",
                lambda: self.attendance_repo.upsert_for_booking(booking["id"], booking["client_id"], booking["start_date"])
            ))
        if booking.get("status") != BookingStatus.canceled.value:
            effects.append(PostCommitEffect("calendar", lambda: self.calendar_service.mirror_booking(booking)))
        if _held_equipment(booking):
            effects.append(PostCommitEffect(
                "equipment", lambda: self.equipment_repo.set_status(booking["equipment_id"], "out")
            ))
        return effects

    def _update_effects(self, before: Dict[str, Any], booking: Dict[str, Any]) -> List[PostCommitEffect]:
        effects = []
        canceled = booking.get("status") == BookingStatus.canceled.value

        if booking.get("client_id") and booking.get("start_date"):
            if canceled:
                effects.append(PostCommitEffect(
                    "attendance", lambda: self.attendance_repo.set_status_for_booking(booking["id"], "cancelled")
                ))
            else:
                effects.append(PostCommitEffect(
                    "attendance",
                    lambda: self.attendance_repo.upsert_for_booking(booking["id"], booking["client_id"], booking["start_date"])
                ))

        if canceled:
            effects.append(PostCommitEffect("calendar", lambda: self.calendar_service.remove_mirror(booking)))
        else:
            effects.append(PostCommitEffect("calendar", lambda: self.calendar_service.mirror_booking(booking)))

        released, taken = _held_equipment(before), _held_equipment(booking)
        if released and released != taken:
            effects.append(PostCommitEffect(
                "equipment release", lambda: self.equipment_repo.set_status(released, "available")
            ))
        if taken and taken != released:
            effects.append(PostCommitEffect("equipment", lambda: self.equipment_repo.set_status(taken, "out")))

        if booking.get("total_fee") != before.get("total_fee"):
            effects.append(PostCommitEffect(
                "payment status", lambda: self.reconciler.reconcile_booking(booking["id"])
            ))
        return effects

    async def create_booking(self, payload: Dict[str, Any]):
        fields = resolve_booking(parse_booking_request(payload))
        await self._check_references(fields)

        async with self._resource_lock(fields):
            if fields["status"] != BookingStatus.canceled.value:
                await self._check_conflicts(fields)
            booking = await self.booking_repo.add_booking(Booking(**fields))

        logging.info(f"Booking {booking['id']} created for {fields['service_type']}")
        await run_post_commit(booking["id"], self._create_effects(booking))
        return await self.booking_repo.find_booking(booking["id"]) or booking

    async def get_bookings(
        self,
        client_id: Optional[str] = None,
        service_type: Optional[str] = None,
        service_code: Optional[str] = None,
        status: Optional[str] = None,
        room_id: Optional[str] = None,
        equipment_id: Optional[str] = None,
        class_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        query = {}
        filters = {
            "client_id": client_id,
            "service_type": service_type,
            "service_code": service_code,
            "status": status,
            "room_id": room_id,
            "equipment_id": equipment_id,
            "class_id": class_id,
        }
        for field, value in filters.items():
            if value:
                query[field] = value
        if start_date or end_date:
            query["start_date"] = {}
            if start_date:
                query["start_date"]["$gte"] = start_date
            if end_date:
                query["start_date"]["$lt"] = end_date
        return await self.booking_repo.find_bookings(query)

    async def get_booking(self, booking_id: str):
        booking = await self.booking_repo.find_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    async def update_booking(self, booking_id: str, payload: Dict[str, Any]):
        existing = await self.get_booking(booking_id)
        if existing.get("status") in TERMINAL_STATUSES:
            raise ValidationError(f"Booking is {existing['status']} and can no longer be changed")
        if "payment_status" in (payload or {}):
            raise ValidationError("payment_status is derived from payments and cannot be updated")

        changes = BookingUpdate.model_validate(payload or {}).model_dump(exclude_unset=True)
        if not changes:
            return existing

        if _is_class_session(existing):
            # Session bookings follow their class; only the status is editable here.
            if set(changes) - {"status"}:
                raise ValidationError("Class session bookings are managed by their class; only status can change")
            if changes["status"] not in [item.value for item in BookingStatus]:
                raise ValidationError("Invalid status")
            fields = {"status": changes["status"]}
            schedule_changed = False
        else:
            merged = {field: existing.get(field) for field in REQUEST_FIELDS}
            merged.update(changes)
            fields = resolve_booking(parse_booking_request(merged))
            fields.pop("payment_status")
            await self._check_references(fields)
            schedule_changed = any(fields[field] != existing.get(field) for field in SCHEDULE_FIELDS)

        target = {**existing, **fields}
        async with self._resource_lock(target):
            if schedule_changed and target["status"] != BookingStatus.canceled.value:
                await self._check_conflicts(target, exclude_booking_id=booking_id)
            booking = await self.booking_repo.update_booking(booking_id, fields)
        if not booking:
            raise NotFoundError("Booking not found")

        await run_post_commit(booking_id, self._update_effects(existing, booking))
        return await self.booking_repo.find_booking(booking_id) or booking

    async def delete_booking(self, booking_id: str):
        booking = await self.get_booking(booking_id)

        await run_post_commit(booking_id, [
            PostCommitEffect("calendar", lambda: self.calendar_service.remove_mirror(booking, clear_ref=False))
        ])
        if not await self.booking_repo.delete_booking(booking_id):
            raise NotFoundError("Booking not found")

        effects = [PostCommitEffect("attendance", lambda: self.attendance_repo.delete_for_booking(booking_id))]
        held = _held_equipment(booking)
        if held:
            effects.append(PostCommitEffect("equipment", lambda: self.equipment_repo.set_status(held, "available")))
        await run_post_commit(booking_id, effects)
        return {"message": "Booking deleted"}

    async def return_equipment(self, booking_id: str):
        booking = await self.booking_repo.find_booking(booking_id)
        if not booking or booking.get("service_type") != "equipment":
            raise NotFoundError("Equipment booking not found")
        if booking.get("status") == BookingStatus.canceled.value:
            raise ValidationError("A canceled booking cannot be returned")

        updated = await self.booking_repo.update_booking(
            booking_id, {"returned": True, "status": BookingStatus.completed.value}
        )
        effects = [PostCommitEffect("calendar", lambda: self.calendar_service.mirror_booking(updated))]
        if booking.get("equipment_id"):
            effects.insert(0, PostCommitEffect(
                "equipment", lambda: self.equipment_repo.set_status(booking["equipment_id"], "available")
            ))
        await run_post_commit(booking_id, effects)
        return {"message": "Equipment marked as returned", "booking": updated}

    async def check_availability(
        self,
        service_type: Optional[str],
        resource_id: Optional[str],
        start: Optional[datetime],
        end: Optional[datetime],
        exclude_booking_id: Optional[str] = None,
    ):
        """Would a booking of this resource for [start, end) go through? Read-only."""
        if not service_type:
            raise ValidationError("service_type is required")
        if not self.conflict_checker.is_exclusive(service_type):
            raise ValidationError("Unsupported service_type")
        if not resource_id:
            raise ValidationError(f"{RESOURCE_FIELDS[service_type]} is required for {service_type} availability")
        if start is None or end is None:
            raise ValidationError("start_date and end_date are required")
        if end <= start:
            raise ValidationError("end_date must be after start_date")

        local = await self.conflict_checker.find_conflicts(
            service_type, resource_id, start, end, exclude_booking_id=exclude_booking_id
        )
        external = await self._external_conflicts(start, end, exclude_booking_id, local)
        return {
            "available": not local and not external,
            "local_conflicts": local,
            "external_conflicts": external,
        }
