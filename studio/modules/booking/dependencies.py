from fastapi import Depends
from studio.modules.attendance.repository import AttendanceRepository
from studio.modules.booking.repository import BookingRepository
from studio.modules.booking.service import BookingService
from studio.modules.calendar.dependencies import get_calendar_service
from studio.modules.calendar.service import CalendarService
from studio.modules.classes.repository import ClassRepository
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.payments.dependencies import get_payment_reconciler
from studio.modules.payments.reconciliation import PaymentReconciler
from studio.modules.rooms.repository import RoomRepository

def get_booking_service(
    booking_repo: BookingRepository = Depends(),
    room_repo: RoomRepository = Depends(),
    equipment_repo: EquipmentRepository = Depends(),
    class_repo: ClassRepository = Depends(),
    attendance_repo: AttendanceRepository = Depends(),
    calendar_service: CalendarService = Depends(get_calendar_service),
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
) -> BookingService:
    return BookingService(
        booking_repo,
        room_repo,
        equipment_repo,
        class_repo,
        attendance_repo,
        calendar_service,
        reconciler,
    )
