from fastapi import APIRouter, Depends
from typing import Optional
from datetime import datetime
from studio.core.intervals import normalize_datetime
from studio.modules.auth.utility import staff_or_admin
from studio.modules.attendance.dependencies import get_attendance_service
from studio.modules.attendance.models import AttendanceCreate, AttendanceUpdate, BulkPresentRequest
from studio.modules.attendance.service import AttendanceService

attendance_router = APIRouter(prefix="/attendance", tags=["Attendance"], dependencies=[Depends(staff_or_admin)])

@attendance_router.post("/", status_code=201)
async def create_attendance(data: AttendanceCreate, attendance_service: AttendanceService = Depends(get_attendance_service)):
    return await attendance_service.create_attendance(data)

@attendance_router.get("/")
async def get_attendances(
    booking_id: Optional[str] = None,
    class_id: Optional[str] = None,
    client_id: Optional[str] = None,
    session_date: Optional[datetime] = None,
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    return await attendance_service.get_attendances(
        booking_id=booking_id,
        class_id=class_id,
        client_id=client_id,
        session_date=normalize_datetime(session_date)
    )

@attendance_router.post("/bulk-present")
async def bulk_mark_present(data: BulkPresentRequest, attendance_service: AttendanceService = Depends(get_attendance_service)):
    return await attendance_service.bulk_mark_present(data)

@attendance_router.get("/{attendance_id}")
async def get_attendance(attendance_id: str, attendance_service: AttendanceService = Depends(get_attendance_service)):
    return await attendance_service.get_attendance(attendance_id)

@attendance_router.put("/{attendance_id}")
async def update_attendance(attendance_id: str, data: AttendanceUpdate, attendance_service: AttendanceService = Depends(get_attendance_service)):
    return await attendance_service.update_attendance(attendance_id, data)

@attendance_router.delete("/{attendance_id}")
async def delete_attendance(attendance_id: str, attendance_service: AttendanceService = Depends(get_attendance_service)):
    return await attendance_service.delete_attendance(attendance_id)
