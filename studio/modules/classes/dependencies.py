from fastapi import Depends
from studio.modules.booking.repository import BookingRepository
from studio.modules.calendar.dependencies import get_calendar_service
from studio.modules.calendar.service import CalendarService
from studio.modules.classes.repository import ClassRepository
from studio.modules.classes.service import ClassService
from studio.modules.classes.sync import ClassSessionSynchronizer
from studio.modules.rooms.repository import RoomRepository

def get_class_service(
    class_repo: ClassRepository = Depends(),
    room_repo: RoomRepository = Depends(),
    booking_repo: BookingRepository = Depends(),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> ClassService:
    synchronizer = ClassSessionSynchronizer(booking_repo, calendar_service=calendar_service)
    return ClassService(class_repo, room_repo, synchronizer)
