import logging
import uuid
from datetime import datetime, timezone
from typing import Optional
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from studio.core.database import mongodb


class AttendanceRepository:
    async def _upsert(self, key: dict, session_date: datetime, status: str, notes: Optional[str] = None):
        now = datetime.now(timezone.utc)
        on_insert = {"id": str(uuid.uuid4()), "status": status, "created_at": now}
        if notes is not None:
            on_insert["notes"] = notes
        try:
            return await mongodb.db.attendance.find_one_and_update(
                key,
                {
                    "$set": {"session_date": session_date, "updated_at": now},
                    "$setOnInsert": on_insert
                },
                upsert=True,
                projection={"_id": 0},
                return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            # A concurrent upsert created the row first; that row is the result.
            logging.info(f"Attendance row for {key} already exists")
            return await mongodb.db.attendance.find_one(key, {"_id": 0})

    async def upsert_for_booking(self, booking_id: str, client_id: str, session_date: datetime, status: str = "scheduled", notes: Optional[str] = None):
        return await self._upsert({"booking_id": booking_id, "client_id": client_id}, session_date, status, notes)

    async def upsert_for_class_session(self, class_id: str, client_id: str, session_date: datetime, status: str = "scheduled", notes: Optional[str] = None):
        return await self._upsert(
            {"class_id": class_id, "session_date": session_date, "client_id": client_id},
            session_date, status, notes
        )

    async def set_status_for_booking(self, booking_id: str, status: str):
        return await mongodb.db.attendance.update_many(
            {"booking_id": booking_id},
            {"$set": {"status": status, "updated_at": datetime.now(timezone.utc)}}
        )

    async def delete_for_booking(self, booking_id: str) -> int:
        result = await mongodb.db.attendance.delete_many({"booking_id": booking_id})
        return result.deleted_count

    async def find_attendance(self, attendance_id: str):
        return await mongodb.db.attendance.find_one({"id": attendance_id}, {"_id": 0})

    async def find_attendances(self, query: dict):
        return await mongodb.db.attendance.find(query, {"_id": 0}).sort("session_date", 1).to_list(1000)

    async def update_attendance(self, attendance_id: str, update_data: dict):
        return await mongodb.db.attendance.find_one_and_update(
            {"id": attendance_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def delete_attendance(self, attendance_id: str) -> bool:
        result = await mongodb.db.attendance.delete_one({"id": attendance_id})
        return result.deleted_count == 1

    async def mark_session_present(self, class_id: str, session_date: datetime) -> int:
        result = await mongodb.db.attendance.update_many(
            {"class_id": class_id, "session_date": session_date},
            {"$set": {"status": "present", "updated_at": datetime.now(timezone.utc)}}
        )
        return result.modified_count
