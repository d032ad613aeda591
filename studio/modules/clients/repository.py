import re
from typing import Optional
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.clients.models import Client


class ClientRepository:
    async def add_client(self, client: Client):
        data = client.model_dump()
        await mongodb.db.clients.insert_one(dict(data))
        return data

    async def find_client(self, client_id: str):
        return await mongodb.db.clients.find_one({"id": client_id}, {"_id": 0})

    async def find_clients(self, name: Optional[str] = None, type: Optional[str] = None):
        query = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if type:
            query["type"] = type
        return await mongodb.db.clients.find(query, {"_id": 0}).sort("name", 1).to_list(1000)

    async def update_client(self, client_id: str, update_data: dict):
        return await mongodb.db.clients.find_one_and_update(
            {"id": client_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def delete_client(self, client_id: str) -> bool:
        result = await mongodb.db.clients.delete_one({"id": client_id})
        return result.deleted_count == 1

    async def count_clients(self) -> int:
        return await mongodb.db.clients.count_documents({})
