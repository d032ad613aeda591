import re
from typing import Optional
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.rooms.models import Room


class RoomRepository:
    async def add_room(self, room: Room):
        data = room.model_dump()
        await mongodb.db.rooms.insert_one(dict(data))
        return data

    async def find_room(self, room_id: str):
        return await mongodb.db.rooms.find_one({"id": room_id}, {"_id": 0})

    async def find_rooms(self, name: Optional[str] = None, type: Optional[str] = None):
        query = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if type:
            query["type"] = type
        return await mongodb.db.rooms.find(query, {"_id": 0}).sort("name", 1).to_list(500)

    async def update_room(self, room_id: str, update_data: dict):
        return await mongodb.db.rooms.find_one_and_update(
            {"id": room_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def delete_room(self, room_id: str) -> bool:
        result = await mongodb.db.rooms.delete_one({"id": room_id})
        return result.deleted_count == 1
