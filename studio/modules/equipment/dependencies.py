from fastapi import Depends
from studio.modules.equipment.repository import EquipmentRepository
from studio.modules.equipment.service import EquipmentService

def get_equipment_service(
    equipment_repo: EquipmentRepository = Depends(),
) -> EquipmentService:
    return EquipmentService(equipment_repo)
