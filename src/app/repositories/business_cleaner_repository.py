from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import BusinessCleaner, User


@dataclass
class RosterEntry:
    """A roster link with its cleaner account and job counters"""

    link: BusinessCleaner
    cleaner: User
    total_jobs: int
    today_jobs: int


class IBusinessCleanerRepository(ABC):
    """Staff roster repository interface - application layer"""

    @abstractmethod
    async def get_link(self, business_id: UUID, cleaner_id: UUID) -> Optional[BusinessCleaner]:
        """Get the link between a business and a cleaner"""
        pass

    @abstractmethod
    async def get_first_active(self, cleaner_id: UUID) -> Optional[BusinessCleaner]:
        """Get the oldest ACTIVE link of a cleaner"""
        pass

    @abstractmethod
    async def list_with_job_counts(
        self, business_id: UUID, day_start: datetime, day_end: datetime
    ) -> List[RosterEntry]:
        """Roster with total and today's job counts, in a single grouped query"""
        pass

    @abstractmethod
    async def create(self, link: BusinessCleaner) -> BusinessCleaner:
        """Create a new roster link"""
        pass

    @abstractmethod
    async def update(self, link: BusinessCleaner) -> BusinessCleaner:
        """Update existing roster link"""
        pass

    @abstractmethod
    async def delete(self, link: BusinessCleaner) -> None:
        """Delete a roster link"""
        pass

    @abstractmethod
    async def count_by_business(self, business_id: UUID) -> int:
        """Number of roster links for a business"""
        pass
