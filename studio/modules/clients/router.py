from fastapi import APIRouter, Depends
from typing import Optional
from studio.modules.auth.utility import admin_only, staff_or_admin
from studio.modules.clients.dependencies import get_client_service
from studio.modules.clients.models import ClientCreate, ClientType, ClientUpdate
from studio.modules.clients.service import ClientService

client_router = APIRouter(prefix="/clients", tags=["Clients"])

@client_router.post("/", status_code=201, dependencies=[Depends(staff_or_admin)])
async def create_client(data: ClientCreate, client_service: ClientService = Depends(get_client_service)):
    return await client_service.create_client(data)

@client_router.get("/", dependencies=[Depends(staff_or_admin)])
async def get_clients(
    name: Optional[str] = None,
    type: Optional[ClientType] = None,
    client_service: ClientService = Depends(get_client_service)
):
    return await client_service.get_clients(name=name, type=type.value if type else None)

@client_router.get("/{client_id}", dependencies=[Depends(staff_or_admin)])
async def get_client(client_id: str, client_service: ClientService = Depends(get_client_service)):
    return await client_service.get_client(client_id)

@client_router.put("/{client_id}", dependencies=[Depends(staff_or_admin)])
async def update_client(client_id: str, data: ClientUpdate, client_service: ClientService = Depends(get_client_service)):
    return await client_service.update_client(client_id, data)

@client_router.delete("/{client_id}", dependencies=[Depends(admin_only)])
async def delete_client(client_id: str, client_service: ClientService = Depends(get_client_service)):
    return await client_service.delete_client(client_id)
