from typing import Optional
from datetime import datetime
from studio.core.errors import NotFoundError
from studio.modules.attendance.models import AttendanceCreate, AttendanceUpdate, BulkPresentRequest
from studio.modules.attendance.repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance_repo: AttendanceRepository):
        self.attendance_repo = attendance_repo

    async def create_attendance(self, data: AttendanceCreate):
        """Create or return the row for this participant.

        A second create for the same booking (or class session) and client
        returns the existing row instead of failing.
        """
        if data.booking_id:
            return await self.attendance_repo.upsert_for_booking(
                data.booking_id, data.client_id, data.session_date, data.status, data.notes
            )
        return await self.attendance_repo.upsert_for_class_session(
            data.class_id, data.client_id, data.session_date, data.status, data.notes
        )

    async def get_attendances(
        self,
        booking_id: Optional[str] = None,
        class_id: Optional[str] = None,
        client_id: Optional[str] = None,
        session_date: Optional[datetime] = None,
    ):
        query = {}
        if booking_id:
            query["booking_id"] = booking_id
        if class_id:
            query["class_id"] = class_id
        if client_id:
            query["client_id"] = client_id
        if session_date:
            query["session_date"] = session_date
        return await self.attendance_repo.find_attendances(query)

    async def get_attendance(self, attendance_id: str):
        attendance = await self.attendance_repo.find_attendance(attendance_id)
        if not attendance:
            raise NotFoundError("Attendance record not found")
        return attendance

    async def update_attendance(self, attendance_id: str, data: AttendanceUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_attendance(attendance_id)
        attendance = await self.attendance_repo.update_attendance(attendance_id, update_data)
        if not attendance:
            raise NotFoundError("Attendance record not found")
        return attendance

    async def delete_attendance(self, attendance_id: str):
        if not await self.attendance_repo.delete_attendance(attendance_id):
            raise NotFoundError("Attendance record not found")
        return {"message": "Attendance record deleted"}

    async def bulk_mark_present(self, data: BulkPresentRequest):
        modified = await self.attendance_repo.mark_session_present(data.class_id, data.session_date)
        return {"modified_count": modified}
