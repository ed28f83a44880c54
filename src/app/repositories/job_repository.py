from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Job, JobChecklistItem, JobPhoto, JobStatus


class IJobRepository(ABC):
    """Job repository interface - tenant-scoped reads plus cross-tenant sweep queries"""

    @abstractmethod
    async def get(self, business_id: UUID, job_id: UUID) -> Optional[Job]:
        """Get a job of a business"""
        pass

    @abstractmethod
    async def get_many(self, business_id: UUID, job_ids: Sequence[UUID]) -> List[Job]:
        """Get several jobs of a business at once"""
        pass

    @abstractmethod
    async def list(
        self,
        business_id: UUID,
        cleaner_id: Optional[UUID] = None,
        client_id: Optional[UUID] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[JobStatus] = None,
    ) -> List[Job]:
        """Jobs of a business ordered by scheduled date, optionally filtered"""
        pass

    @abstractmethod
    async def count(
        self,
        business_id: UUID,
        cleaner_id: Optional[UUID] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[JobStatus] = None,
    ) -> int:
        """Number of jobs of a business matching the filters"""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Number of jobs across all businesses"""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a new job"""
        pass

    @abstractmethod
    async def create_many(self, jobs: Sequence[Job]) -> List[Job]:
        """Create several jobs in one flush"""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Update existing job"""
        pass

    @abstractmethod
    async def delete(self, job: Job) -> None:
        """Delete a job together with its checklist items and photos"""
        pass

    @abstractmethod
    async def list_checklist(self, job_ids: Sequence[UUID]) -> List[JobChecklistItem]:
        """Checklist items of the given jobs"""
        pass

    @abstractmethod
    async def get_checklist_item(self, job_id: UUID, item_id: UUID) -> Optional[JobChecklistItem]:
        """Get a checklist item belonging to a job"""
        pass

    @abstractmethod
    async def add_checklist_items(self, items: Sequence[JobChecklistItem]) -> None:
        """Create checklist items"""
        pass

    @abstractmethod
    async def update_checklist_item(self, item: JobChecklistItem) -> JobChecklistItem:
        """Update a checklist item"""
        pass

    @abstractmethod
    async def list_photos(self, job_ids: Sequence[UUID]) -> List[JobPhoto]:
        """Photos of the given jobs"""
        pass

    @abstractmethod
    async def add_photo(self, photo: JobPhoto) -> JobPhoto:
        """Attach a photo to a job"""
        pass

    @abstractmethod
    async def list_pending_reminders(self, now: datetime) -> List[Job]:
        """Upcoming SCHEDULED jobs with reminders enabled and not yet sent"""
        pass

    @abstractmethod
    async def list_completed_recurring_since(self, since: datetime) -> List[Job]:
        """Completed recurring jobs updated after ``since``"""
        pass

    @abstractmethod
    async def exists_between(
        self, business_id: UUID, client_id: UUID, start: datetime, end: datetime
    ) -> bool:
        """Whether the client already has a job in [start, end]"""
        pass
