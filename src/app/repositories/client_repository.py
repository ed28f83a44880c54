from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Client


class IClientRepository(ABC):
    """Client repository interface - every lookup is scoped to a business"""

    @abstractmethod
    async def get(self, business_id: UUID, client_id: UUID) -> Optional[Client]:
        """Get a client of a business"""
        pass

    @abstractmethod
    async def get_many(self, business_id: UUID, client_ids: Sequence[UUID]) -> List[Client]:
        """Get several clients of a business"""
        pass

    @abstractmethod
    async def list(self, business_id: UUID) -> List[Client]:
        """All clients of a business, newest first"""
        pass

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """Create a new client"""
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """Update existing client"""
        pass

    @abstractmethod
    async def delete(self, client: Client) -> None:
        """Delete a client"""
        pass

    @abstractmethod
    async def count_by_business(self, business_id: UUID) -> int:
        """Number of clients of a business"""
        pass
