from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, case, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.business_cleaner_repository import (
    IBusinessCleanerRepository,
    RosterEntry,
)
from src.domain.base import utc_now
from src.domain.entities import BusinessCleaner, CleanerStatus, Job, User


class BusinessCleanerRepository(IBusinessCleanerRepository):
    """Staff roster repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_link(self, business_id: UUID, cleaner_id: UUID) -> Optional[BusinessCleaner]:
        stmt = select(BusinessCleaner).where(
            BusinessCleaner.business_id == business_id,
            BusinessCleaner.cleaner_id == cleaner_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_first_active(self, cleaner_id: UUID) -> Optional[BusinessCleaner]:
        stmt = (
            select(BusinessCleaner)
            .where(
                BusinessCleaner.cleaner_id == cleaner_id,
                BusinessCleaner.status == CleanerStatus.ACTIVE,
            )
            .order_by(BusinessCleaner.created_at)
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_with_job_counts(
        self, business_id: UUID, day_start: datetime, day_end: datetime
    ) -> List[RosterEntry]:
        """Roster joined with one grouped aggregate over the business's jobs"""
        is_today = and_(Job.scheduled_date >= day_start, Job.scheduled_date < day_end)
        job_counts = (
            select(
                Job.cleaner_id.label("cleaner_id"),
                func.count(Job.id).label("total_jobs"),
                func.sum(case((is_today, 1), else_=0)).label("today_jobs"),
            )
            .where(Job.business_id == business_id, Job.cleaner_id.is_not(None))
            .group_by(Job.cleaner_id)
            .subquery()
        )
        stmt = (
            select(
                BusinessCleaner,
                User,
                func.coalesce(job_counts.c.total_jobs, 0),
                func.coalesce(job_counts.c.today_jobs, 0),
            )
            .join(User, User.id == BusinessCleaner.cleaner_id)
            .outerjoin(job_counts, job_counts.c.cleaner_id == BusinessCleaner.cleaner_id)
            .where(BusinessCleaner.business_id == business_id)
            .order_by(BusinessCleaner.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return [
            RosterEntry(link=link, cleaner=user, total_jobs=int(total), today_jobs=int(today))
            for link, user, total, today in result.all()
        ]

    async def create(self, link: BusinessCleaner) -> BusinessCleaner:
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def update(self, link: BusinessCleaner) -> BusinessCleaner:
        link.updated_at = utc_now()
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def delete(self, link: BusinessCleaner) -> None:
        await self.session.delete(link)
        await self.session.flush()

    async def count_by_business(self, business_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(BusinessCleaner)
            .where(BusinessCleaner.business_id == business_id)
        )
        result = await self.session.exec(stmt)
        return result.one()
