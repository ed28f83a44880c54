"""
Subscription bookkeeping shared with other use cases.
"""

from datetime import datetime
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.billing import SUBSCRIPTION_PERIOD
from src.domain.entities import JobUsage, PlanType, Subscription, SubscriptionStatus


async def get_or_create_subscription(uow: UnitOfWork, business_id: UUID) -> Subscription:
    """The business's subscription, created as FREE/ACTIVE when missing"""
    subscription = await uow.subscriptions.get_by_business(business_id)
    if subscription is None:
        subscription = await uow.subscriptions.create(
            Subscription(
                business_id=business_id,
                plan_type=PlanType.FREE,
                status=SubscriptionStatus.ACTIVE,
                current_period_end=utc_now() + SUBSCRIPTION_PERIOD,
            )
        )
    return subscription


async def track_job_usage(uow: UnitOfWork, business_id: UUID, now: datetime) -> JobUsage:
    """Count one job creation against the business's current month"""
    usage = await uow.subscriptions.get_usage(business_id, now.month, now.year)
    if usage is None:
        subscription = await get_or_create_subscription(uow, business_id)
        usage = JobUsage(
            business_id=business_id,
            subscription_id=subscription.id,
            month=now.month,
            year=now.year,
            job_count=0,
        )
    usage.job_count += 1
    return await uow.subscriptions.save_usage(usage)
