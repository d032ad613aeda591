from typing import Optional
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.enrollments.models import Enrollment


class EnrollmentRepository:
    async def add_enrollment(self, enrollment: Enrollment):
        data = enrollment.model_dump()
        await mongodb.db.enrollments.insert_one(dict(data))
        return data

    async def find_enrollment(self, enrollment_id: str):
        return await mongodb.db.enrollments.find_one({"id": enrollment_id}, {"_id": 0})

    async def find_enrollments(self, class_id: Optional[str] = None, student_id: Optional[str] = None):
        query = {}
        if class_id:
            query["class_id"] = class_id
        if student_id:
            query["student_id"] = student_id
        return await mongodb.db.enrollments.find(query, {"_id": 0}).sort("enrolled_on", 1).to_list(1000)

    async def count_for_class(self, class_id: str) -> int:
        return await mongodb.db.enrollments.count_documents({"class_id": class_id})

    async def update_enrollment(self, enrollment_id: str, update_data: dict):
        return await mongodb.db.enrollments.find_one_and_update(
            {"id": enrollment_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def set_payment_status(self, enrollment_id: str, payment_status: str):
        return await mongodb.db.enrollments.update_one(
            {"id": enrollment_id},
            {"$set": {"payment_status": payment_status}}
        )

    async def delete_enrollment(self, enrollment_id: str) -> bool:
        result = await mongodb.db.enrollments.delete_one({"id": enrollment_id})
        return result.deleted_count == 1
