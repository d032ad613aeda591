from fastapi import APIRouter, Depends
from studio.modules.auth.utility import staff_or_admin
from studio.modules.catalog.catalog import SERVICE_CATALOG

catalog_router = APIRouter(prefix="/catalog", tags=["Catalog"], dependencies=[Depends(staff_or_admin)])

@catalog_router.get("/services")
async def list_services():
    return [service.model_dump() for service in SERVICE_CATALOG]
