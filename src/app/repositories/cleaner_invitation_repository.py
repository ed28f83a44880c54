from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import CleanerInvitation


class ICleanerInvitationRepository(ABC):
    """Cleaner invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[CleanerInvitation]:
        """Get invitation by SHA-256 token hash"""
        pass

    @abstractmethod
    async def create(self, invitation: CleanerInvitation) -> CleanerInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: CleanerInvitation) -> CleanerInvitation:
        """Update existing invitation"""
        pass
