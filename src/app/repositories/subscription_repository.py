from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import UUID

from src.domain.entities import JobUsage, PlanType, Subscription, SubscriptionStatus


class ISubscriptionRepository(ABC):
    """Subscription and usage repository interface - application layer"""

    @abstractmethod
    async def get_by_business(self, business_id: UUID) -> Optional[Subscription]:
        """Get the subscription of a business"""
        pass

    @abstractmethod
    async def get_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        """Get subscription by payment provider id"""
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        pass

    @abstractmethod
    async def count_by_plan(self) -> Dict[PlanType, int]:
        """Number of subscriptions per plan"""
        pass

    @abstractmethod
    async def count_by_status(self) -> Dict[SubscriptionStatus, int]:
        """Number of subscriptions per status"""
        pass

    @abstractmethod
    async def get_usage(self, business_id: UUID, month: int, year: int) -> Optional[JobUsage]:
        """Usage counter for one month"""
        pass

    @abstractmethod
    async def save_usage(self, usage: JobUsage) -> JobUsage:
        """Create or update a usage counter"""
        pass

    @abstractmethod
    async def list_usage(self, business_id: UUID, limit: int = 12) -> List[JobUsage]:
        """Most recent usage counters, newest first"""
        pass
