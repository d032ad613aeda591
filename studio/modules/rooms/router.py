from fastapi import APIRouter, Depends
from typing import Optional
from studio.modules.auth.utility import admin_only, staff_or_admin
from studio.modules.rooms.dependencies import get_room_service
from studio.modules.rooms.models import RoomCreate, RoomUpdate
from studio.modules.rooms.service import RoomService

room_router = APIRouter(prefix="/rooms", tags=["Rooms"])

@room_router.post("/", status_code=201, dependencies=[Depends(staff_or_admin)])
async def add_room(data: RoomCreate, room_service: RoomService = Depends(get_room_service)):
    return await room_service.add_room(data)

@room_router.get("/", dependencies=[Depends(staff_or_admin)])
async def get_rooms(
    name: Optional[str] = None,
    type: Optional[str] = None,
    room_service: RoomService = Depends(get_room_service)
):
    return await room_service.get_rooms(name=name, type=type)

@room_router.get("/{room_id}", dependencies=[Depends(staff_or_admin)])
async def get_room(room_id: str, room_service: RoomService = Depends(get_room_service)):
    return await room_service.get_room(room_id)

@room_router.put("/{room_id}", dependencies=[Depends(staff_or_admin)])
async def update_room(room_id: str, data: RoomUpdate, room_service: RoomService = Depends(get_room_service)):
    return await room_service.update_room(room_id, data)

@room_router.delete("/{room_id}", dependencies=[Depends(admin_only)])
async def delete_room(room_id: str, room_service: RoomService = Depends(get_room_service)):
    return await room_service.delete_room(room_id)
