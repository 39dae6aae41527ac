"""Client router - FastAPI endpoints for client (lead) operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_org_id
from ...database import get_db
from .schemas import ClientCreate, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("", response_model=list[ClientResponse])
async def get_clients(
    org_id: str = Depends(get_current_org_id),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients in the current workspace"""
    return service.get_clients(org_id)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    org_id: str = Depends(get_current_org_id),
    service: ClientService = Depends(get_client_service),
):
    return service.get_client(client_id, org_id)


@router.post("", response_model=ClientResponse)
async def create_client(
    data: ClientCreate,
    org_id: str = Depends(get_current_org_id),
    service: ClientService = Depends(get_client_service),
):
    return service.create_client(data, org_id)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    org_id: str = Depends(get_current_org_id),
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(client_id, data, org_id)


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    org_id: str = Depends(get_current_org_id),
    service: ClientService = Depends(get_client_service),
):
    return service.delete_client(client_id, org_id)
