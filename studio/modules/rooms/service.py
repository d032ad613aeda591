from typing import Optional
from studio.core.errors import NotFoundError
from studio.modules.rooms.models import Room, RoomCreate, RoomUpdate
from studio.modules.rooms.repository import RoomRepository


class RoomService:
    def __init__(self, room_repo: RoomRepository):
        self.room_repo = room_repo

    async def add_room(self, data: RoomCreate):
        return await self.room_repo.add_room(Room(**data.model_dump()))

    async def get_rooms(self, name: Optional[str] = None, type: Optional[str] = None):
        return await self.room_repo.find_rooms(name=name, type=type)

    async def get_room(self, room_id: str):
        room = await self.room_repo.find_room(room_id)
        if not room:
            raise NotFoundError("Room not found")
        return room

    async def update_room(self, room_id: str, data: RoomUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_room(room_id)
        room = await self.room_repo.update_room(room_id, update_data)
        if not room:
            raise NotFoundError("Room not found")
        return room

    async def delete_room(self, room_id: str):
        if not await self.room_repo.delete_room(room_id):
            raise NotFoundError("Room not found")
        return {"message": "Room deleted"}
