"""
Client Use Case DTOs
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.domain.entities import Client


class ClientResponse(BaseModel):
    """Client of a business"""

    id: str
    business_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, client: Client) -> "ClientResponse":
        return cls(
            id=str(client.id),
            business_id=str(client.business_id),
            name=client.name,
            email=client.email,
            phone=client.phone,
            address=client.address,
            notes=client.notes,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class DeleteClientResponse(BaseModel):
    status: str
    deleted_jobs: int = 0
