import logging
from typing import Optional
from studio.core.errors import NotFoundError
from studio.modules.classes.models import ClassCreate, ClassUpdate, StudioClass
from studio.modules.classes.repository import ClassRepository
from studio.modules.classes.sync import ClassSessionSynchronizer
from studio.modules.rooms.repository import RoomRepository


class ClassService:
    def __init__(
        self,
        class_repo: ClassRepository,
        room_repo: RoomRepository,
        synchronizer: ClassSessionSynchronizer,
    ):
        self.class_repo = class_repo
        self.room_repo = room_repo
        self.synchronizer = synchronizer

    async def _check_room(self, room_id: Optional[str]):
        if room_id and not await self.room_repo.find_room(room_id):
            raise NotFoundError("Room not found")

    async def _sync_rooms(self, studio_class: dict):
        try:
            return await self.synchronizer.sync(studio_class)
        except Exception as e:
            logging.warning(f"Room booking sync failed for class {studio_class['id']}: {e}")
            return None

    async def create_class(self, data: ClassCreate):
        await self._check_room(data.room_id)
        studio_class = await self.class_repo.add_class(StudioClass(**data.model_dump()))
        return {**studio_class, "room_sync": await self._sync_rooms(studio_class)}

    async def get_classes(self, name: Optional[str] = None, instructor: Optional[str] = None):
        return await self.class_repo.find_classes(name=name, instructor=instructor)

    async def get_class(self, class_id: str):
        studio_class = await self.class_repo.find_class(class_id)
        if not studio_class:
            raise NotFoundError("Class not found")
        return studio_class

    async def update_class(self, class_id: str, data: ClassUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if "room_id" in update_data:
            await self._check_room(update_data["room_id"])
        if not update_data:
            studio_class = await self.get_class(class_id)
        else:
            studio_class = await self.class_repo.update_class(class_id, update_data)
            if not studio_class:
                raise NotFoundError("Class not found")
        return {**studio_class, "room_sync": await self._sync_rooms(studio_class)}

    async def delete_class(self, class_id: str):
        if not await self.class_repo.delete_class(class_id):
            raise NotFoundError("Class not found")
        removed = await self.synchronizer.remove_sessions(class_id)
        return {"message": "Class deleted", "removed_bookings": removed}
