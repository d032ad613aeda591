from datetime import datetime

import pytest

from studio.core.locks import ResourceLocks
from studio.modules.booking.models import Booking
from studio.modules.booking.repository import BookingRepository
from studio.modules.calendar.service import CalendarService
from studio.modules.classes.repository import ClassRepository
from studio.modules.classes.service import ClassService
from studio.modules.classes.sync import ClassSessionSynchronizer
from studio.modules.clients.repository import ClientRepository
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.rooms.repository import RoomRepository

MONDAY = datetime(2025, 3, 10, 18, 0)
WEDNESDAY = datetime(2025, 3, 12, 18, 0)
FRIDAY = datetime(2025, 3, 14, 18, 0)


@pytest.fixture
def synchronizer(db):
    return ClassSessionSynchronizer(BookingRepository(), locks=ResourceLocks(), buffer_minutes=0, default_session_minutes=90)


@pytest.mark.asyncio
async def test_sync_creates_one_room_booking_per_session(synchronizer, make_room, make_class):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY], session_length_minutes=60)

    tally = await synchronizer.sync(studio_class)

    assert tally == {"created": 2, "removed": 0, "skipped": 0}
    bookings = await BookingRepository().find_class_bookings(studio_class["id"])
    assert [(b["start_date"], b["end_date"]) for b in bookings] == [
        (MONDAY, datetime(2025, 3, 10, 19, 0)),
        (WEDNESDAY, datetime(2025, 3, 12, 19, 0)),
    ]
    assert all(b["status"] == "scheduled" and b["payment_status"] == "unpaid" for b in bookings)


@pytest.mark.asyncio
async def test_second_sync_changes_nothing(synchronizer, make_room, make_class):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY, FRIDAY])

    await synchronizer.sync(studio_class)
    tally = await synchronizer.sync(studio_class)

    assert tally == {"created": 0, "removed": 0, "skipped": 0}
    assert len(await BookingRepository().find_class_bookings(studio_class["id"])) == 3


@pytest.mark.asyncio
async def test_session_length_falls_back_to_the_default(synchronizer, make_room, make_class):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY], session_length_minutes=0)

    await synchronizer.sync(studio_class)

    [booking] = await BookingRepository().find_class_bookings(studio_class["id"])
    assert booking["end_date"] == datetime(2025, 3, 10, 19, 30)


@pytest.mark.asyncio
async def test_conflicting_session_is_skipped_and_foreign_booking_kept(synchronizer, make_room, make_class):
    room = await make_room()
    foreign = await BookingRepository().add_booking(Booking(
        service_type="room",
        room_id=room["id"],
        start_date=datetime(2025, 3, 12, 18, 30),
        end_date=datetime(2025, 3, 12, 20, 0),
        full_price=40,
    ))
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY])

    tally = await synchronizer.sync(studio_class)

    assert tally == {"created": 1, "removed": 0, "skipped": 1}
    kept = await BookingRepository().find_booking(foreign["id"])
    assert kept["start_date"] == datetime(2025, 3, 12, 18, 30)
    assert kept["status"] == "scheduled"

    again = await synchronizer.sync(studio_class)
    assert again == {"created": 0, "removed": 0, "skipped": 1}


@pytest.mark.asyncio
async def test_schedule_change_removes_stale_sessions(synchronizer, make_room, make_class):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY])
    await synchronizer.sync(studio_class)

    tally = await synchronizer.sync({**studio_class, "schedule": [WEDNESDAY, FRIDAY]})

    assert tally == {"created": 1, "removed": 1, "skipped": 0}
    bookings = await BookingRepository().find_class_bookings(studio_class["id"])
    assert [b["start_date"] for b in bookings] == [WEDNESDAY, FRIDAY]


@pytest.mark.asyncio
async def test_room_change_moves_every_session(synchronizer, make_room, make_class):
    room = await make_room()
    new_room = await make_room("Studio B")
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY])
    await synchronizer.sync(studio_class)

    tally = await synchronizer.sync({**studio_class, "room_id": new_room["id"]})

    assert tally == {"created": 2, "removed": 2, "skipped": 0}
    bookings = await BookingRepository().find_class_bookings(studio_class["id"])
    assert {b["room_id"] for b in bookings} == {new_room["id"]}


@pytest.mark.asyncio
async def test_clearing_the_room_removes_all_sessions(synchronizer, make_room, make_class):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY])
    await synchronizer.sync(studio_class)

    tally = await synchronizer.sync({**studio_class, "room_id": None})

    assert tally == {"created": 0, "removed": 2, "skipped": 0}
    assert await BookingRepository().find_class_bookings(studio_class["id"]) == []


@pytest.fixture
def calendar_service(db, calendar_client):
    return CalendarService(
        calendar_client, BookingRepository(), RoomRepository(), EquipmentRepository(), ClientRepository(), "UTC"
    )


@pytest.fixture
def mirrored_synchronizer(calendar_service):
    return ClassSessionSynchronizer(
        BookingRepository(), locks=ResourceLocks(), buffer_minutes=0, calendar_service=calendar_service
    )


async def mirror_sessions(calendar_service, class_id):
    for booking in await BookingRepository().find_class_bookings(class_id):
        await calendar_service.mirror_booking(booking)


@pytest.mark.asyncio
async def test_removed_session_takes_its_calendar_event_along(
    mirrored_synchronizer, calendar_service, calendar_client, make_room, make_class
):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY])
    await mirrored_synchronizer.sync(studio_class)
    await mirror_sessions(calendar_service, studio_class["id"])
    assert [event["id"] for event in calendar_client.events] == ["evt-1"]

    tally = await mirrored_synchronizer.sync({**studio_class, "schedule": [WEDNESDAY]})

    assert tally == {"created": 1, "removed": 1, "skipped": 0}
    assert calendar_client.deleted == ["evt-1"]
    assert calendar_client.events == []


@pytest.mark.asyncio
async def test_calendar_outage_does_not_block_session_removal(
    mirrored_synchronizer, calendar_service, calendar_client, make_room, make_class
):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY])
    await mirrored_synchronizer.sync(studio_class)
    await mirror_sessions(calendar_service, studio_class["id"])
    calendar_client.fail = True

    tally = await mirrored_synchronizer.sync({**studio_class, "room_id": None})

    assert tally == {"created": 0, "removed": 1, "skipped": 0}
    assert await BookingRepository().find_class_bookings(studio_class["id"]) == []


@pytest.mark.asyncio
async def test_deleting_a_class_removes_mirrored_sessions(
    mirrored_synchronizer, calendar_service, calendar_client, make_room, make_class
):
    room = await make_room()
    studio_class = await make_class(room_id=room["id"], schedule=[MONDAY, WEDNESDAY])
    await mirrored_synchronizer.sync(studio_class)
    await mirror_sessions(calendar_service, studio_class["id"])
    service = ClassService(ClassRepository(), RoomRepository(), mirrored_synchronizer)

    result = await service.delete_class(studio_class["id"])

    assert result == {"message": "Class deleted", "removed_bookings": 2}
    assert sorted(calendar_client.deleted) == ["evt-1", "evt-2"]
    assert await BookingRepository().find_class_bookings(studio_class["id"]) == []
