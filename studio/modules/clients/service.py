from typing import Optional
from studio.core.errors import NotFoundError
from studio.modules.clients.models import Client, ClientCreate, ClientUpdate
from studio.modules.clients.repository import ClientRepository


class ClientService:
    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def create_client(self, data: ClientCreate):
        return await self.client_repo.add_client(Client(**data.model_dump()))

    async def get_clients(self, name: Optional[str] = None, type: Optional[str] = None):
        return await self.client_repo.find_clients(name=name, type=type)

    async def get_client(self, client_id: str):
        client = await self.client_repo.find_client(client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def update_client(self, client_id: str, data: ClientUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_client(client_id)
        client = await self.client_repo.update_client(client_id, update_data)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def delete_client(self, client_id: str):
        if not await self.client_repo.delete_client(client_id):
            raise NotFoundError("Client not found")
        return {"message": "Client deleted"}
