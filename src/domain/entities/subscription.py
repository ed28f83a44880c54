"""
Subscription Entities

Plan tier per business and monthly job usage counters.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now

from .enums import PlanType, SubscriptionStatus


class Subscription(SQLModel, table=True):
    """
    Subscription entity - exactly one per business.

    Business Rules:
    - Created as FREE/ACTIVE with the business, or on first read if missing
    - Status follows payment provider webhooks
    """

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", unique=True, index=True)

    plan_type: PlanType = Field(default=PlanType.FREE)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.ACTIVE)
    stripe_subscription_id: Optional[str] = Field(default=None, max_length=255, index=True)
    current_period_end: datetime = Field(sa_column=Column(DateTime, nullable=False))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class JobUsage(SQLModel, table=True):
    """Jobs created by a business in one calendar month"""

    __tablename__ = "job_usage"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)
    subscription_id: UUID = Field(foreign_key="subscriptions.id", nullable=False)
    month: int = Field(nullable=False)
    year: int = Field(nullable=False)
    job_count: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("business_id", "month", "year", name="uq_job_usage_period"),
    )
