from fastapi import APIRouter, Depends
from typing import Optional
from datetime import datetime
from studio.core.errors import ValidationError
from studio.core.intervals import normalize_datetime
from studio.modules.auth.utility import staff_or_admin
from studio.modules.calendar.dependencies import get_calendar_service
from studio.modules.calendar.schemas import CalendarSyncRequest
from studio.modules.calendar.service import CalendarService

calendar_router = APIRouter(prefix="/calendar", tags=["Calendar"], dependencies=[Depends(staff_or_admin)])

def _check_window(start: datetime, end: datetime):
    if end <= start:
        raise ValidationError("end_date must be after start_date")

@calendar_router.get("/events")
async def get_events(
    start_date: datetime,
    end_date: datetime,
    room: Optional[str] = None,
    calendar_service: CalendarService = Depends(get_calendar_service)
):
    start, end = normalize_datetime(start_date), normalize_datetime(end_date)
    _check_window(start, end)
    return await calendar_service.list_events(start, end, room=room)

@calendar_router.post("/sync")
async def sync_bookings(data: CalendarSyncRequest, calendar_service: CalendarService = Depends(get_calendar_service)):
    _check_window(data.start_date, data.end_date)
    return await calendar_service.sync_bookings(data.start_date, data.end_date)
