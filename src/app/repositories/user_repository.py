from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from src.domain.entities import User, UserRole


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Sequence[UUID]) -> List[User]:
        """Get several users at once"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def list_page(self, offset: int, limit: int) -> List[User]:
        """Users ordered by newest first"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Total number of users"""
        pass

    @abstractmethod
    async def count_by_role(self) -> Dict[UserRole, int]:
        """Number of users per role"""
        pass
