from datetime import datetime

import pytest
from pymongo.errors import DuplicateKeyError

from studio.modules.attendance.models import AttendanceCreate, BulkPresentRequest
from studio.modules.attendance.repository import AttendanceRepository
from studio.modules.attendance.service import AttendanceService

SESSION = datetime(2025, 3, 10, 18, 0)


@pytest.fixture
def attendance_service(db):
    return AttendanceService(AttendanceRepository())


@pytest.mark.asyncio
async def test_creating_the_same_row_twice_returns_the_first(attendance_service):
    data = AttendanceCreate(booking_id="b-1", client_id="c-1", session_date=SESSION)

    first = await attendance_service.create_attendance(data)
    second = await attendance_service.create_attendance(data)

    assert first["id"] == second["id"]
    assert len(await attendance_service.get_attendances(booking_id="b-1")) == 1


@pytest.mark.asyncio
async def test_class_session_rows_are_unique_per_session_and_client(attendance_service):
    await attendance_service.create_attendance(AttendanceCreate(class_id="k-1", client_id="c-1", session_date=SESSION))
    await attendance_service.create_attendance(AttendanceCreate(class_id="k-1", client_id="c-1", session_date=SESSION))
    await attendance_service.create_attendance(AttendanceCreate(class_id="k-1", client_id="c-2", session_date=SESSION))

    rows = await attendance_service.get_attendances(class_id="k-1")
    assert sorted(row["client_id"] for row in rows) == ["c-1", "c-2"]


@pytest.mark.asyncio
async def test_duplicate_key_race_is_treated_as_success(db, monkeypatch):
    repo = AttendanceRepository()
    existing = await repo.upsert_for_booking("b-1", "c-1", SESSION)

    async def racing_upsert(self, *args, **kwargs):
        raise DuplicateKeyError("E11000 duplicate key error")

    monkeypatch.setattr(type(db.attendance), "find_one_and_update", racing_upsert)

    row = await repo.upsert_for_booking("b-1", "c-1", SESSION)

    assert row["id"] == existing["id"]


def test_attendance_needs_an_owner():
    with pytest.raises(ValueError):
        AttendanceCreate(client_id="c-1", session_date=SESSION)


@pytest.mark.asyncio
async def test_bulk_present_marks_the_whole_session(attendance_service):
    for client_id in ("c-1", "c-2"):
        await attendance_service.create_attendance(AttendanceCreate(class_id="k-1", client_id=client_id, session_date=SESSION))
    await attendance_service.create_attendance(
        AttendanceCreate(class_id="k-1", client_id="c-3", session_date=datetime(2025, 3, 12, 18, 0))
    )

    result = await attendance_service.bulk_mark_present(BulkPresentRequest(class_id="k-1", session_date=SESSION))

    assert result == {"modified_count": 2}
    rows = await attendance_service.get_attendances(class_id="k-1", session_date=SESSION)
    assert {row["status"] for row in rows} == {"present"}
