from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.job_repository import IJobRepository
from src.domain.base import utc_now
from src.domain.entities import Job, JobChecklistItem, JobPhoto, JobStatus, JobType


class JobRepository(IJobRepository):
    """Job repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _filtered(stmt, business_id, cleaner_id=None, client_id=None, start=None, end=None, status=None):
        stmt = stmt.where(Job.business_id == business_id)
        if cleaner_id is not None:
            stmt = stmt.where(Job.cleaner_id == cleaner_id)
        if client_id is not None:
            stmt = stmt.where(Job.client_id == client_id)
        if start is not None:
            stmt = stmt.where(Job.scheduled_date >= start)
        if end is not None:
            stmt = stmt.where(Job.scheduled_date < end)
        if status is not None:
            stmt = stmt.where(Job.status == status)
        return stmt

    async def get(self, business_id: UUID, job_id: UUID) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id, Job.business_id == business_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_many(self, business_id: UUID, job_ids: Sequence[UUID]) -> List[Job]:
        if not job_ids:
            return []
        stmt = select(Job).where(Job.business_id == business_id, Job.id.in_(list(job_ids)))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list(
        self,
        business_id: UUID,
        cleaner_id: Optional[UUID] = None,
        client_id: Optional[UUID] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[JobStatus] = None,
    ) -> List[Job]:
        stmt = self._filtered(
            select(Job), business_id, cleaner_id, client_id, start, end, status
        ).order_by(Job.scheduled_date, Job.scheduled_time)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(
        self,
        business_id: UUID,
        cleaner_id: Optional[UUID] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[JobStatus] = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(Job),
            business_id,
            cleaner_id=cleaner_id,
            start=start,
            end=end,
            status=status,
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def count_all(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(Job))
        return result.one()

    async def create(self, job: Job) -> Job:
        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)
        return job

    async def create_many(self, jobs: Sequence[Job]) -> List[Job]:
        self.session.add_all(list(jobs))
        await self.session.flush()
        return list(jobs)

    async def update(self, job: Job) -> Job:
        job.updated_at = utc_now()
        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)
        return job

    async def delete(self, job: Job) -> None:
        await self.session.execute(delete(JobChecklistItem).where(JobChecklistItem.job_id == job.id))
        await self.session.execute(delete(JobPhoto).where(JobPhoto.job_id == job.id))
        await self.session.delete(job)
        await self.session.flush()

    async def list_checklist(self, job_ids: Sequence[UUID]) -> List[JobChecklistItem]:
        if not job_ids:
            return []
        stmt = (
            select(JobChecklistItem)
            .where(JobChecklistItem.job_id.in_(list(job_ids)))
            .order_by(JobChecklistItem.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_checklist_item(self, job_id: UUID, item_id: UUID) -> Optional[JobChecklistItem]:
        stmt = select(JobChecklistItem).where(
            JobChecklistItem.id == item_id, JobChecklistItem.job_id == job_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def add_checklist_items(self, items: Sequence[JobChecklistItem]) -> None:
        self.session.add_all(list(items))
        await self.session.flush()

    async def update_checklist_item(self, item: JobChecklistItem) -> JobChecklistItem:
        item.updated_at = utc_now()
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def list_photos(self, job_ids: Sequence[UUID]) -> List[JobPhoto]:
        if not job_ids:
            return []
        stmt = (
            select(JobPhoto)
            .where(JobPhoto.job_id.in_(list(job_ids)))
            .order_by(JobPhoto.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def add_photo(self, photo: JobPhoto) -> JobPhoto:
        self.session.add(photo)
        await self.session.flush()
        await self.session.refresh(photo)
        return photo

    async def list_pending_reminders(self, now: datetime) -> List[Job]:
        stmt = (
            select(Job)
            .where(
                Job.status == JobStatus.SCHEDULED,
                Job.reminder_enabled.is_(True),
                Job.reminder_sent.is_(False),
                Job.scheduled_date >= now,
            )
            .order_by(Job.scheduled_date)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_completed_recurring_since(self, since: datetime) -> List[Job]:
        stmt = select(Job).where(
            Job.type == JobType.RECURRING,
            Job.status == JobStatus.COMPLETED,
            Job.frequency.is_not(None),
            Job.updated_at >= since,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def exists_between(
        self, business_id: UUID, client_id: UUID, start: datetime, end: datetime
    ) -> bool:
        stmt = (
            select(Job.id)
            .where(
                Job.business_id == business_id,
                Job.client_id == client_id,
                Job.scheduled_date >= start,
                Job.scheduled_date <= end,
            )
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first() is not None
