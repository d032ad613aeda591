from datetime import datetime

import httpx
import pytest

from studio.core.errors import IntegrationFailure
from studio.modules.booking.models import Booking
from studio.modules.booking.repository import BookingRepository
from studio.modules.calendar.client import GoogleCalendarClient
from studio.modules.calendar.service import CalendarService, normalize_event
from studio.modules.clients.repository import ClientRepository
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.rooms.repository import RoomRepository

START = datetime(2025, 3, 10, 10, 0)
END = datetime(2025, 3, 10, 11, 0)


def calendar_with(handler, calendar_id="studio@group.calendar.google.com", token="token-123"):
    return GoogleCalendarClient(
        calendar_id=calendar_id,
        access_token=token,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def make_calendar_service(calendar_client):
    return CalendarService(
        calendar_client, BookingRepository(), RoomRepository(), EquipmentRepository(), ClientRepository(), "UTC"
    )


# client
@pytest.mark.asyncio
async def test_unconfigured_client_makes_no_requests():
    def handler(request):
        raise AssertionError("no request expected")

    client = calendar_with(handler, calendar_id=None)

    assert client.configured is False
    assert await client.list_events(START, END) == []
    assert await client.create_event({"summary": "x"}) is None
    assert await client.delete_event("evt-1") is None


@pytest.mark.asyncio
async def test_deleting_a_forbidden_event_still_fails():
    client = calendar_with(lambda request: httpx.Response(403, text="forbidden"))

    with pytest.raises(IntegrationFailure) as exc:
        await client.delete_event("evt-1")
    assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_non_object_payload_raises_integration_failure():
    client = calendar_with(lambda request: httpx.Response(200, json=["not", "an", "object"]))

    with pytest.raises(IntegrationFailure):
        await client.list_events(START, END)
    with pytest.raises(IntegrationFailure):
        await client.create_event({"summary": "x"})


@pytest.mark.asyncio
async def test_list_events_drops_non_object_items():
    client = calendar_with(lambda request: httpx.Response(200, json={"items": ["junk", {"id": "a"}]}))

    assert await client.list_events(START, END) == [{"id": "a"}]


@pytest.mark.asyncio
async def test_list_events_follows_pages():
    seen = []

    def handler(request):
        seen.append(request)
        if "pageToken" not in request.url.params:
            return httpx.Response(200, json={"items": [{"id": "a"}], "nextPageToken": "page-2"})
        return httpx.Response(200, json={"items": [{"id": "b"}]})

    events = await calendar_with(handler).list_events(START, END)

    assert [event["id"] for event in events] == ["a", "b"]
    assert seen[0].headers["Authorization"] == "Bearer token-123"
    assert seen[0].url.params["singleEvents"] == "true"
    assert seen[0].url.params["timeMin"] == "2025-03-10T10:00:00+00:00"
    assert seen[1].url.params["pageToken"] == "page-2"


@pytest.mark.asyncio
async def test_error_status_raises_integration_failure():
    client = calendar_with(lambda request: httpx.Response(500, text="backend error"))

    with pytest.raises(IntegrationFailure) as exc:
        await client.list_events(START, END)
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_transport_error_raises_integration_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(IntegrationFailure):
        await calendar_with(handler).create_event({"summary": "x"})


@pytest.mark.asyncio
async def test_create_event_returns_the_remote_id():
    def handler(request):
        assert request.method == "POST"
        assert request.url.path.endswith("/events")
        return httpx.Response(200, json={"id": "remote-42"})

    assert await calendar_with(handler).create_event({"summary": "Room: Studio A"}) == "remote-42"


@pytest.mark.asyncio
async def test_deleting_a_gone_event_is_not_an_error():
    client = calendar_with(lambda request: httpx.Response(410))

    assert await client.delete_event("evt-1") is None


# normalization
def test_normalize_timed_event():
    event = normalize_event({
        "id": "e1",
        "summary": "Party",
        "start": {"dateTime": "2025-03-10T12:00:00+02:00"},
        "end": {"dateTime": "2025-03-10T13:00:00+02:00"},
    })
    assert event["start"] == START
    assert event["end"] == END
    assert event["is_all_day"] is False


def test_normalize_all_day_event():
    event = normalize_event({"id": "e2", "start": {"date": "2025-03-10"}, "end": {"date": "2025-03-11"}})
    assert event["start"] == datetime(2025, 3, 10)
    assert event["end"] == datetime(2025, 3, 11)
    assert event["is_all_day"] is True


def test_normalize_skips_events_without_id_or_window():
    assert normalize_event({"start": {"date": "2025-03-10"}}) is None
    assert normalize_event({"id": "e3", "start": {}}) is None
    assert normalize_event({"id": "e4", "start": {"dateTime": "not a date"}, "end": {}}) is None
    assert normalize_event({"id": "e5", "start": "2025-03-10T10:00:00Z", "end": "2025-03-10T11:00:00Z"}) is None
    assert normalize_event({"id": "e6", "start": {"date": 20250310}, "end": {}}) is None


# conflict adapter and mirroring
@pytest.mark.asyncio
async def test_find_conflicts_skips_known_and_excluded_events(db, calendar_client):
    calendar_client.events = [
        {"id": "mine", "start": {"dateTime": "2025-03-10T10:00:00Z"}, "end": {"dateTime": "2025-03-10T11:00:00Z"}},
        {"id": "linked", "start": {"dateTime": "2025-03-10T10:00:00Z"}, "end": {"dateTime": "2025-03-10T11:00:00Z"}},
        {"id": "other", "summary": "Rehearsal", "start": {"dateTime": "2025-03-10T10:30:00Z"}, "end": {"dateTime": "2025-03-10T12:00:00Z"}},
        {"id": "later", "start": {"dateTime": "2025-03-10T11:00:00Z"}, "end": {"dateTime": "2025-03-10T12:00:00Z"}},
    ]
    booking = await BookingRepository().add_booking(Booking(
        service_type="service", start_date=START, end_date=END, full_price=10,
        external_event_ref={"calendar_id": "studio-calendar", "event_id": "mine"},
    ))
    service = make_calendar_service(calendar_client)

    conflicts = await service.find_conflicts(START, END, exclude_booking_id=booking["id"], known_event_ids={"linked"})

    assert conflicts == [{"id": "other", "summary": "Rehearsal", "start": datetime(2025, 3, 10, 10, 30), "end": datetime(2025, 3, 10, 12, 0)}]


@pytest.mark.asyncio
async def test_find_conflicts_treats_outage_as_no_conflicts(db, calendar_client):
    calendar_client.fail = True
    calendar_client.events = [{"id": "x", "start": {"dateTime": "2025-03-10T10:00:00Z"}, "end": {"dateTime": "2025-03-10T11:00:00Z"}}]

    assert await make_calendar_service(calendar_client).find_conflicts(START, END) == []


@pytest.mark.asyncio
async def test_malformed_calendar_reply_does_not_block_a_booking(make_booking_service, make_room):
    booking_service = make_booking_service()
    booking_service.calendar_service.calendar_client = calendar_with(
        lambda request: httpx.Response(200, json=["not", "an", "object"])
    )
    room = await make_room()

    booking = await booking_service.create_booking({
        "service_type": "room",
        "room_id": room["id"],
        "start_date": "2025-03-10T10:00:00Z",
        "end_date": "2025-03-10T11:00:00Z",
        "full_price": 40,
    })

    stored = await BookingRepository().find_booking(booking["id"])
    assert stored["start_date"] == START
    assert stored["external_event_ref"] is None


@pytest.mark.asyncio
async def test_mirror_builds_a_readable_event(db, calendar_client, make_room, make_client):
    room = await make_room("Studio A")
    client = await make_client("Dana Client")
    booking = await BookingRepository().add_booking(Booking(
        service_type="room", room_id=room["id"], client_id=client["id"],
        start_date=START, end_date=END, full_price=40, total_fee=40, currency="USD",
    ))

    ref = await make_calendar_service(calendar_client).mirror_booking(booking)

    assert ref == {"calendar_id": "studio-calendar", "event_id": "evt-1"}
    details = calendar_client.created[0]
    assert details["summary"] == "Room: Studio A - Dana Client"
    assert details["location"] == "Studio A"
    assert details["start"] == {"dateTime": "2025-03-10T10:00:00Z", "timeZone": "UTC"}
    assert "Price: 40.0 USD" in details["description"]
    stored = await BookingRepository().find_booking(booking["id"])
    assert stored["external_event_ref"] == ref


@pytest.mark.asyncio
async def test_list_events_filters_by_room(db, calendar_client):
    calendar_client.events = [
        {"id": "a", "summary": "Room: Studio A", "start": {"dateTime": "2025-03-10T10:00:00Z"}, "end": {"dateTime": "2025-03-10T11:00:00Z"}},
        {"id": "b", "summary": "Room: Studio B", "start": {"dateTime": "2025-03-10T10:00:00Z"}, "end": {"dateTime": "2025-03-10T11:00:00Z"}},
    ]

    events = await make_calendar_service(calendar_client).list_events(START, END, room="studio a")

    assert [event["id"] for event in events] == ["a"]


@pytest.mark.asyncio
async def test_sync_mirrors_only_unmirrored_scheduled_bookings(db, calendar_client):
    repo = BookingRepository()
    await repo.add_booking(Booking(service_type="service", start_date=START, end_date=END, full_price=10))
    await repo.add_booking(Booking(service_type="service", start_date=END, end_date=datetime(2025, 3, 10, 12), full_price=10))
    await repo.add_booking(Booking(service_type="service", start_date=START, end_date=END, full_price=10, status="canceled"))
    service = make_calendar_service(calendar_client)

    first = await service.sync_bookings(datetime(2025, 3, 10), datetime(2025, 3, 11))
    second = await service.sync_bookings(datetime(2025, 3, 10), datetime(2025, 3, 11))

    assert first == {"configured": True, "mirrored": 2, "failed": 0}
    assert second == {"configured": True, "mirrored": 0, "failed": 0}


@pytest.mark.asyncio
async def test_sync_without_a_calendar_does_nothing(db, calendar_client):
    calendar_client.configured = False

    result = await make_calendar_service(calendar_client).sync_bookings(datetime(2025, 3, 10), datetime(2025, 3, 11))

    assert result == {"configured": False, "mirrored": 0, "failed": 0}
