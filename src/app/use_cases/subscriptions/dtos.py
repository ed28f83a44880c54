"""
Subscription Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import JobUsage, Subscription


class SubscriptionResponse(BaseModel):
    id: str
    business_id: str
    plan_type: str
    status: str
    stripe_subscription_id: Optional[str] = None
    current_period_end: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResponse":
        return cls(
            id=str(subscription.id),
            business_id=str(subscription.business_id),
            plan_type=subscription.plan_type.value,
            status=subscription.status.value,
            stripe_subscription_id=subscription.stripe_subscription_id,
            current_period_end=subscription.current_period_end,
            created_at=subscription.created_at,
            updated_at=subscription.updated_at,
        )


class UsageEntry(BaseModel):
    month: int
    year: int
    job_count: int

    @classmethod
    def from_entity(cls, usage: JobUsage) -> "UsageEntry":
        return cls(month=usage.month, year=usage.year, job_count=usage.job_count)


class UsageStatsResponse(BaseModel):
    """Current plan, this month's job count against the plan limit, and history"""

    current_plan: str
    status: str
    current_month_usage: int
    monthly_limit: int
    usage: List[UsageEntry]
