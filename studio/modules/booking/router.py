from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, Optional
from datetime import datetime
from studio.core.intervals import normalize_datetime
from studio.modules.auth.utility import staff_or_admin
from studio.modules.booking.dependencies import get_booking_service
from studio.modules.booking.service import BookingService

booking_router = APIRouter(prefix="/bookings", tags=["Bookings"], dependencies=[Depends(staff_or_admin)])

@booking_router.post("/", status_code=201)
async def create_booking(
    payload: Dict[str, Any] = Body(...),
    booking_service: BookingService = Depends(get_booking_service)
):
    return await booking_service.create_booking(payload)

@booking_router.get("/")
async def get_bookings(
    client_id: Optional[str] = None,
    service_type: Optional[str] = None,
    service_code: Optional[str] = None,
    status: Optional[str] = None,
    room_id: Optional[str] = None,
    equipment_id: Optional[str] = None,
    class_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    booking_service: BookingService = Depends(get_booking_service)
):
    return await booking_service.get_bookings(
        client_id=client_id,
        service_type=service_type,
        service_code=service_code,
        status=status,
        room_id=room_id,
        equipment_id=equipment_id,
        class_id=class_id,
        start_date=normalize_datetime(start_date),
        end_date=normalize_datetime(end_date)
    )

@booking_router.get("/availability")
async def check_availability(
    service_type: Optional[str] = None,
    room_id: Optional[str] = None,
    equipment_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    exclude_booking_id: Optional[str] = None,
    booking_service: BookingService = Depends(get_booking_service)
):
    resource_id = equipment_id if service_type == "equipment" else room_id
    return await booking_service.check_availability(
        service_type,
        resource_id,
        normalize_datetime(start_date),
        normalize_datetime(end_date),
        exclude_booking_id=exclude_booking_id
    )

@booking_router.get("/{booking_id}")
async def get_booking(booking_id: str, booking_service: BookingService = Depends(get_booking_service)):
    return await booking_service.get_booking(booking_id)

@booking_router.put("/{booking_id}")
async def update_booking(
    booking_id: str,
    payload: Dict[str, Any] = Body(...),
    booking_service: BookingService = Depends(get_booking_service)
):
    return await booking_service.update_booking(booking_id, payload)

@booking_router.delete("/{booking_id}")
async def delete_booking(booking_id: str, booking_service: BookingService = Depends(get_booking_service)):
    return await booking_service.delete_booking(booking_id)

@booking_router.post("/{booking_id}/return")
async def return_equipment(booking_id: str, booking_service: BookingService = Depends(get_booking_service)):
    return await booking_service.return_equipment(booking_id)
