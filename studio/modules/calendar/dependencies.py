from fastapi import Depends
from studio.modules.booking.repository import BookingRepository
from studio.modules.calendar.client import GoogleCalendarClient
from studio.modules.calendar.service import CalendarService
from studio.modules.clients.repository import ClientRepository
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.rooms.repository import RoomRepository

def get_calendar_client() -> GoogleCalendarClient:
    return GoogleCalendarClient()

def get_calendar_service(
    calendar_client: GoogleCalendarClient = Depends(get_calendar_client),
    booking_repo: BookingRepository = Depends(),
    room_repo: RoomRepository = Depends(),
    equipment_repo: EquipmentRepository = Depends(),
    client_repo: ClientRepository = Depends(),
) -> CalendarService:
    return CalendarService(calendar_client, booking_repo, room_repo, equipment_repo, client_repo)
