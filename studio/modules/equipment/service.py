from typing import Optional
from studio.core.errors import NotFoundError
from studio.modules.equipment.models import Equipment, EquipmentCreate, EquipmentUpdate
from studio.modules.equipment.repository import EquipmentRepository


class EquipmentService:
    def __init__(self, equipment_repo: EquipmentRepository):
        self.equipment_repo = equipment_repo

    async def add_equipment(self, data: EquipmentCreate):
        return await self.equipment_repo.add_equipment(Equipment(**data.model_dump()))

    async def get_equipment_list(self, name: Optional[str] = None, type: Optional[str] = None, status: Optional[str] = None):
        return await self.equipment_repo.find_equipment_list(name=name, type=type, status=status)

    async def get_equipment(self, equipment_id: str):
        equipment = await self.equipment_repo.find_equipment(equipment_id)
        if not equipment:
            raise NotFoundError("Equipment not found")
        return equipment

    async def update_equipment(self, equipment_id: str, data: EquipmentUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_equipment(equipment_id)
        equipment = await self.equipment_repo.update_equipment(equipment_id, update_data)
        if not equipment:
            raise NotFoundError("Equipment not found")
        return equipment

    async def delete_equipment(self, equipment_id: str):
        if not await self.equipment_repo.delete_equipment(equipment_id):
            raise NotFoundError("Equipment not found")
        return {"message": "Equipment deleted"}
