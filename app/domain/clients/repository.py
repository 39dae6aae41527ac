"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import commit_or_raise
from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session, org_id: str) -> list[Client]:
        """Get all clients for an organization, newest first"""
        return (
            db.query(Client)
            .filter(Client.org_id == org_id)
            .order_by(Client.created_at.desc())
            .all()
        )

    @staticmethod
    def get_client_by_id(db: Session, client_id: str, org_id: str) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id, Client.org_id == org_id).first()

    @staticmethod
    def get_names(db: Session, client_ids: list[str]) -> dict[str, str]:
        """Map client id -> name for the given ids"""
        if not client_ids:
            return {}
        rows = db.query(Client.id, Client.name).filter(Client.id.in_(client_ids)).all()
        return {row.id: row.name for row in rows}

    @staticmethod
    def create_client(db: Session, org_id: str, **client_data) -> Client:
        client = Client(org_id=org_id, **client_data)
        db.add(client)
        commit_or_raise(db, "create client")
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if hasattr(client, key):
                setattr(client, key, value)

        commit_or_raise(db, "update client")
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        db.delete(client)
        commit_or_raise(db, "delete client")
