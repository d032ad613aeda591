from fastapi import Depends
from studio.modules.attendance.repository import AttendanceRepository
from studio.modules.attendance.service import AttendanceService

def get_attendance_service(
    attendance_repo: AttendanceRepository = Depends(),
) -> AttendanceService:
    return AttendanceService(attendance_repo)
