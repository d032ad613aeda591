from fastapi import APIRouter, Depends
from typing import Optional
from studio.modules.auth.utility import admin_only, staff_or_admin
from studio.modules.equipment.dependencies import get_equipment_service
from studio.modules.equipment.models import EquipmentCreate, EquipmentStatus, EquipmentUpdate
from studio.modules.equipment.service import EquipmentService

equipment_router = APIRouter(prefix="/equipment", tags=["Equipment"])

@equipment_router.post("/", status_code=201, dependencies=[Depends(staff_or_admin)])
async def add_equipment(data: EquipmentCreate, equipment_service: EquipmentService = Depends(get_equipment_service)):
    return await equipment_service.add_equipment(data)

@equipment_router.get("/", dependencies=[Depends(staff_or_admin)])
async def get_equipment_list(
    name: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[EquipmentStatus] = None,
    equipment_service: EquipmentService = Depends(get_equipment_service)
):
    return await equipment_service.get_equipment_list(name=name, type=type, status=status.value if status else None)

@equipment_router.get("/{equipment_id}", dependencies=[Depends(staff_or_admin)])
async def get_equipment(equipment_id: str, equipment_service: EquipmentService = Depends(get_equipment_service)):
    return await equipment_service.get_equipment(equipment_id)

@equipment_router.put("/{equipment_id}", dependencies=[Depends(staff_or_admin)])
async def update_equipment(equipment_id: str, data: EquipmentUpdate, equipment_service: EquipmentService = Depends(get_equipment_service)):
    return await equipment_service.update_equipment(equipment_id, data)

@equipment_router.delete("/{equipment_id}", dependencies=[Depends(admin_only)])
async def delete_equipment(equipment_id: str, equipment_service: EquipmentService = Depends(get_equipment_service)):
    return await equipment_service.delete_equipment(equipment_id)
