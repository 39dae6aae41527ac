"""Client service - Business logic for client operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self, org_id: str) -> list[Client]:
        return self.repo.get_clients(self.db, org_id)

    def get_client(self, client_id: str, org_id: str) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id, org_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def create_client(self, data: ClientCreate, org_id: str) -> Client:
        logger.info(f"📥 Creating client for org {org_id}")
        return self.repo.create_client(self.db, org_id, **data.model_dump())

    def update_client(self, client_id: str, data: ClientUpdate, org_id: str) -> Client:
        client = self.get_client(client_id, org_id)
        updates = data.model_dump(exclude_unset=True)
        if "name" in updates and not (updates["name"] or "").strip():
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: str, org_id: str) -> dict:
        client = self.get_client(client_id, org_id)
        if client.invoices:
            raise HTTPException(status_code=400, detail="Client has invoices and cannot be deleted")
        self.repo.delete_client(self.db, client)
        logger.info(f"🗑️ Deleted client {client_id} in org {org_id}")
        return {"message": "Client deleted"}
