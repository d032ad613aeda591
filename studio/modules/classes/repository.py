import re
from typing import Optional
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.classes.models import StudioClass


class ClassRepository:
    async def add_class(self, studio_class: StudioClass):
        data = studio_class.model_dump()
        await mongodb.db.classes.insert_one(dict(data))
        return data

    async def find_class(self, class_id: str):
        return await mongodb.db.classes.find_one({"id": class_id}, {"_id": 0})

    async def find_classes(self, name: Optional[str] = None, instructor: Optional[str] = None):
        query = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if instructor:
            query["instructor"] = {"$regex": re.escape(instructor), "$options": "i"}
        return await mongodb.db.classes.find(query, {"_id": 0}).sort("name", 1).to_list(500)

    async def update_class(self, class_id: str, update_data: dict):
        return await mongodb.db.classes.find_one_and_update(
            {"id": class_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def delete_class(self, class_id: str) -> bool:
        result = await mongodb.db.classes.delete_one({"id": class_id})
        return result.deleted_count == 1

    async def count_classes(self) -> int:
        return await mongodb.db.classes.count_documents({})
