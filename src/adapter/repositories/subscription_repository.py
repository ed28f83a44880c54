from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.subscription_repository import ISubscriptionRepository
from src.domain.base import utc_now
from src.domain.entities import JobUsage, PlanType, Subscription, SubscriptionStatus


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_business(self, business_id: UUID) -> Optional[Subscription]:
        stmt = select(Subscription).where(Subscription.business_id == business_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        stmt = select(Subscription).where(
            Subscription.stripe_subscription_id == stripe_subscription_id
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, subscription: Subscription) -> Subscription:
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        subscription.updated_at = utc_now()
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def count_by_plan(self) -> Dict[PlanType, int]:
        stmt = select(Subscription.plan_type, func.count()).group_by(Subscription.plan_type)
        result = await self.session.exec(stmt)
        return {PlanType(plan): total for plan, total in result.all()}

    async def count_by_status(self) -> Dict[SubscriptionStatus, int]:
        stmt = select(Subscription.status, func.count()).group_by(Subscription.status)
        result = await self.session.exec(stmt)
        return {SubscriptionStatus(status): total for status, total in result.all()}

    async def get_usage(self, business_id: UUID, month: int, year: int) -> Optional[JobUsage]:
        stmt = select(JobUsage).where(
            JobUsage.business_id == business_id,
            JobUsage.month == month,
            JobUsage.year == year,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save_usage(self, usage: JobUsage) -> JobUsage:
        self.session.add(usage)
        await self.session.flush()
        await self.session.refresh(usage)
        return usage

    async def list_usage(self, business_id: UUID, limit: int = 12) -> List[JobUsage]:
        stmt = (
            select(JobUsage)
            .where(JobUsage.business_id == business_id)
            .order_by(JobUsage.year.desc(), JobUsage.month.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
