# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from studio.core.database import mongodb
from studio.core.errors import IntegrationFailure
from studio.core.locks import ResourceLocks
from studio.main import app
from studio.modules.attendance.repository import AttendanceRepository
from studio.modules.auth.utility import get_current_user
from studio.modules.booking.repository import BookingRepository
from studio.modules.booking.service import BookingService
from studio.modules.calendar.dependencies import get_calendar_client
from studio.modules.calendar.service import CalendarService
from studio.modules.classes.models import StudioClass
from studio.modules.classes.repository import ClassRepository
from studio.modules.clients.models import Client
from studio.modules.clients.repository import ClientRepository
from studio.modules.enrollments.repository import EnrollmentRepository
from studio.modules.equipment.models import Equipment
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.payments.reconciliation import PaymentReconciler
from studio.modules.payments.repository import PaymentRepository
from studio.modules.rooms.models import Room
from studio.modules.rooms.repository import RoomRepository


class FakeCalendarClient:
    """In-memory stand-in for the Google Calendar client."""

    calendar_id = "studio-calendar"

    def __init__(self, events=None, configured=True):
        self.events = list(events or [])
        self.configured = configured
        self.fail = False
        self.created = []
        self.updated = []
        self.deleted = []

    async def list_events(self, time_min, time_max):
        if self.fail:
            raise IntegrationFailure("calendar is down")
        return list(self.events)

    async def create_event(self, details):
        if self.fail:
            raise IntegrationFailure("calendar is down")
        event_id = f"evt-{len(self.created) + 1}"
        self.created.append(details)
        self.events.append({"id": event_id, **details})
        return event_id

    async def update_event(self, event_id, details, calendar_id=None):
        if self.fail:
            raise IntegrationFailure("calendar is down")
        self.updated.append((event_id, details))

    async def delete_event(self, event_id, calendar_id=None):
        if self.fail:
            raise IntegrationFailure("calendar is down")
        self.deleted.append(event_id)
        self.events = [event for event in self.events if event["id"] != event_id]


@pytest.fixture
def db():
    mongodb.db = AsyncMongoMockClient()["studio_test"]
    yield mongodb.db
    mongodb.db = None


@pytest.fixture
def calendar_client():
    return FakeCalendarClient()


@pytest.fixture
def make_booking_service(db, calendar_client):
    def _make_booking_service(buffer_minutes=0):
        booking_repo = BookingRepository()
        calendar_service = CalendarService(
            calendar_client, booking_repo, RoomRepository(), EquipmentRepository(), ClientRepository()
        )
        reconciler = PaymentReconciler(PaymentRepository(), booking_repo, EnrollmentRepository(), ClassRepository())
        return BookingService(
            booking_repo,
            RoomRepository(),
            EquipmentRepository(),
            ClassRepository(),
            AttendanceRepository(),
            calendar_service,
            reconciler,
            locks=ResourceLocks(),
            buffer_minutes=buffer_minutes,
        )
    return _make_booking_service


@pytest.fixture
def booking_service(make_booking_service):
    return make_booking_service()


# Factories
@pytest.fixture
def make_room(db):
    async def _make_room(name="Studio A"):
        return await RoomRepository().add_room(Room(name=name, hourly_rate=20))
    return _make_room


@pytest.fixture
def make_equipment(db):
    async def _make_equipment(name="Pioneer CDJ"):
        return await EquipmentRepository().add_equipment(Equipment(name=name))
    return _make_equipment


@pytest.fixture
def make_client(db):
    async def _make_client(name="Dana Client"):
        return await ClientRepository().add_client(Client(type="individual", name=name))
    return _make_client


@pytest.fixture
def make_class(db):
    async def _make_class(**fields):
        fields.setdefault("name", "DJ Basics")
        return await ClassRepository().add_class(StudioClass(**fields))
    return _make_class


# API
@pytest.fixture
def current_user():
    return {"id": "user-1", "username": "admin", "role": "admin"}


@pytest.fixture
def api(db, calendar_client, current_user):
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_calendar_client] = lambda: calendar_client

    # No context manager: the lifespan would try to reach a real MongoDB.
    yield TestClient(app)

    app.dependency_overrides.clear()
