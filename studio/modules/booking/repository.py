from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.booking.models import Booking, BookingStatus

# Foreign key that identifies the held resource, per exclusive kind.
RESOURCE_FIELDS = {"room": "room_id", "equipment": "equipment_id"}


class BookingRepository:
    async def add_booking(self, booking: Booking):
        data = booking.model_dump()
        await mongodb.db.bookings.insert_one(dict(data))
        return data

    async def find_booking(self, booking_id: str):
        return await mongodb.db.bookings.find_one({"id": booking_id}, {"_id": 0})

    async def find_bookings(self, query: dict, limit: int = 1000):
        return await mongodb.db.bookings.find(query, {"_id": 0}).sort("start_date", 1).to_list(limit)

    async def update_booking(self, booking_id: str, update_data: dict):
        update_data = {**update_data, "updated_at": datetime.now(timezone.utc)}
        return await mongodb.db.bookings.find_one_and_update(
            {"id": booking_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def delete_booking(self, booking_id: str) -> bool:
        result = await mongodb.db.bookings.delete_one({"id": booking_id})
        return result.deleted_count == 1

    async def find_overlapping(
        self,
        service_type: str,
        resource_id: str,
        window_start: datetime,
        window_end: datetime,
        exclude_booking_id: Optional[str] = None,
        exclude_class_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Active bookings of one resource whose stored interval intersects the window."""
        query = {
            "service_type": service_type,
            RESOURCE_FIELDS[service_type]: resource_id,
            "status": {"$ne": BookingStatus.canceled.value},
            "start_date": {"$lt": window_end},
            "end_date": {"$gt": window_start},
        }
        if exclude_booking_id:
            query["id"] = {"$ne": exclude_booking_id}
        if exclude_class_id:
            query["class_id"] = {"$ne": exclude_class_id}
        return await self.find_bookings(query)

    async def find_class_bookings(self, class_id: str):
        return await self.find_bookings({"class_id": class_id, "service_type": "room"})

    async def delete_bookings(self, booking_ids: Iterable[str]) -> int:
        booking_ids = list(booking_ids)
        if not booking_ids:
            return 0
        result = await mongodb.db.bookings.delete_many({"id": {"$in": booking_ids}})
        return result.deleted_count

    async def find_linked_event_ids(self, window_start: datetime, window_end: datetime) -> List[str]:
        """Remote event ids mirrored by local bookings that touch the window."""
        query = {
            "external_event_ref": {"$ne": None},
            "start_date": {"$lt": window_end},
            "$or": [
                {"end_date": {"$gt": window_start}},
                {"end_date": None, "start_date": {"$gte": window_start - timedelta(days=1)}},
            ],
        }
        bookings = await mongodb.db.bookings.find(query, {"_id": 0, "external_event_ref": 1}).to_list(1000)
        return [booking["external_event_ref"]["event_id"] for booking in bookings]

    async def find_unmirrored(self, window_start: datetime, window_end: datetime):
        return await self.find_bookings({
            "status": BookingStatus.scheduled.value,
            "external_event_ref": None,
            "start_date": {"$gte": window_start, "$lt": window_end},
        })

    async def set_external_event_ref(self, booking_id: str, ref: Optional[dict]):
        return await mongodb.db.bookings.update_one(
            {"id": booking_id},
            {"$set": {"external_event_ref": ref}}
        )

    async def set_payment_status(self, booking_id: str, payment_status: str):
        return await mongodb.db.bookings.update_one(
            {"id": booking_id},
            {"$set": {"payment_status": payment_status}}
        )

    async def count_bookings(self, query: Optional[dict] = None) -> int:
        return await mongodb.db.bookings.count_documents(query or {})

    async def count_by_payment_status(self) -> Dict[str, int]:
        pipeline = [{"$group": {"_id": "$payment_status", "count": {"$sum": 1}}}]
        rows = await mongodb.db.bookings.aggregate(pipeline).to_list(100)
        return {row["_id"]: row["count"] for row in rows if row["_id"]}
