from fastapi import APIRouter, Depends
from typing import Optional
from studio.modules.auth.utility import admin_only, staff_or_admin
from studio.modules.classes.dependencies import get_class_service
from studio.modules.classes.models import ClassCreate, ClassUpdate
from studio.modules.classes.service import ClassService

class_router = APIRouter(prefix="/classes", tags=["Classes"])

@class_router.post("/", status_code=201, dependencies=[Depends(staff_or_admin)])
async def create_class(data: ClassCreate, class_service: ClassService = Depends(get_class_service)):
    return await class_service.create_class(data)

@class_router.get("/", dependencies=[Depends(staff_or_admin)])
async def get_classes(
    name: Optional[str] = None,
    instructor: Optional[str] = None,
    class_service: ClassService = Depends(get_class_service)
):
    return await class_service.get_classes(name=name, instructor=instructor)

@class_router.get("/{class_id}", dependencies=[Depends(staff_or_admin)])
async def get_class(class_id: str, class_service: ClassService = Depends(get_class_service)):
    return await class_service.get_class(class_id)

@class_router.put("/{class_id}", dependencies=[Depends(staff_or_admin)])
async def update_class(class_id: str, data: ClassUpdate, class_service: ClassService = Depends(get_class_service)):
    return await class_service.update_class(class_id, data)

@class_router.delete("/{class_id}", dependencies=[Depends(admin_only)])
async def delete_class(class_id: str, class_service: ClassService = Depends(get_class_service)):
    return await class_service.delete_class(class_id)
