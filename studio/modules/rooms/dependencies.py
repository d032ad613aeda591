from fastapi import Depends
from studio.modules.rooms.repository import RoomRepository
from studio.modules.rooms.service import RoomService

def get_room_service(
    room_repo: RoomRepository = Depends(),
) -> RoomService:
    return RoomService(room_repo)
