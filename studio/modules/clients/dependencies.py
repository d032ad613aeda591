from fastapi import Depends
from studio.modules.clients.repository import ClientRepository
from studio.modules.clients.service import ClientService

def get_client_service(
    client_repo: ClientRepository = Depends(),
) -> ClientService:
    return ClientService(client_repo)
