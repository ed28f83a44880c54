from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Business


class IBusinessRepository(ABC):
    """Business (tenant) repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, business_id: UUID) -> Optional[Business]:
        """Get business by ID"""
        pass

    @abstractmethod
    async def get_by_owner(self, user_id: UUID) -> Optional[Business]:
        """Get the business owned by a user"""
        pass

    @abstractmethod
    async def create(self, business: Business) -> Business:
        """Create a new business"""
        pass

    @abstractmethod
    async def update(self, business: Business) -> Business:
        """Update existing business"""
        pass

    @abstractmethod
    async def list_page(self, offset: int, limit: int) -> List[Business]:
        """Businesses ordered by newest first"""
        pass

    @abstractmethod
    async def count(self, created_since: Optional[datetime] = None) -> int:
        """Number of businesses, optionally only those created since a moment"""
        pass

    @abstractmethod
    async def list_by_owners(self, user_ids: Sequence[UUID]) -> List[Business]:
        """Businesses owned by any of the given users"""
        pass
