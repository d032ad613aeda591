import re
from typing import Optional
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.equipment.models import Equipment


class EquipmentRepository:
    async def add_equipment(self, equipment: Equipment):
        data = equipment.model_dump()
        await mongodb.db.equipment.insert_one(dict(data))
        return data

    async def find_equipment(self, equipment_id: str):
        return await mongodb.db.equipment.find_one({"id": equipment_id}, {"_id": 0})

    async def find_equipment_list(self, name: Optional[str] = None, type: Optional[str] = None, status: Optional[str] = None):
        query = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if type:
            query["type"] = type
        if status:
            query["status"] = status
        return await mongodb.db.equipment.find(query, {"_id": 0}).sort("name", 1).to_list(500)

    async def update_equipment(self, equipment_id: str, update_data: dict):
        return await mongodb.db.equipment.find_one_and_update(
            {"id": equipment_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def set_status(self, equipment_id: str, status: str):
        return await mongodb.db.equipment.update_one(
            {"id": equipment_id},
            {"$set": {"status": status}}
        )

    async def delete_equipment(self, equipment_id: str) -> bool:
        result = await mongodb.db.equipment.delete_one({"id": equipment_id})
        return result.deleted_count == 1
