"""
Subscription Use Cases

Plan changes made by the owner directly. Paid upgrades normally arrive through
the payment webhook instead.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.billing import SUBSCRIPTION_PERIOD, job_limit
from src.domain.entities import PlanType, SubscriptionStatus
from src.domain.permissions import Action, can

from .dtos import SubscriptionResponse, UsageEntry, UsageStatsResponse
from .usage import get_or_create_subscription

logger = logging.getLogger(__name__)


class _SubscriptionUseCase:
    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants


class GetSubscriptionUseCase(_SubscriptionUseCase):
    """The caller's subscription; a FREE one is created when missing"""

    async def execute(self, actor: Actor) -> Result[SubscriptionResponse]:
        if not can(actor.role, Action.SUBSCRIPTION_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            subscription = await get_or_create_subscription(self.uow, tenant.value)
            response = SubscriptionResponse.from_entity(subscription)
            await self.uow.commit()
            return Return.ok(response)


class UpdateSubscriptionUseCase(_SubscriptionUseCase):
    """
    Change the plan.

    Business Rules:
    - The billing period restarts (30 days from now)
    - The subscription becomes ACTIVE
    """

    async def execute(
        self,
        actor: Actor,
        plan_type: PlanType,
        stripe_subscription_id: Optional[str] = None,
    ) -> Result[SubscriptionResponse]:
        if not can(actor.role, Action.SUBSCRIPTION_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            subscription = await get_or_create_subscription(self.uow, tenant.value)
            subscription.plan_type = PlanType(plan_type)
            subscription.status = SubscriptionStatus.ACTIVE
            if stripe_subscription_id is not None:
                subscription.stripe_subscription_id = stripe_subscription_id
            subscription.current_period_end = utc_now() + SUBSCRIPTION_PERIOD
            subscription = await self.uow.subscriptions.update(subscription)
            response = SubscriptionResponse.from_entity(subscription)
            await self.uow.commit()

            logger.info(f"Business {tenant.value} moved to plan {subscription.plan_type.value}")
            return Return.ok(response)


class CancelSubscriptionUseCase(_SubscriptionUseCase):
    async def execute(self, actor: Actor) -> Result[SubscriptionResponse]:
        if not can(actor.role, Action.SUBSCRIPTION_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            subscription = await get_or_create_subscription(self.uow, tenant.value)
            subscription.status = SubscriptionStatus.CANCELLED
            subscription = await self.uow.subscriptions.update(subscription)
            response = SubscriptionResponse.from_entity(subscription)
            await self.uow.commit()

            logger.info(f"Subscription cancelled for business {tenant.value}")
            return Return.ok(response)


class GetUsageStatsUseCase(_SubscriptionUseCase):
    """Job usage of the last 12 months against the plan's monthly limit"""

    async def execute(self, actor: Actor) -> Result[UsageStatsResponse]:
        if not can(actor.role, Action.SUBSCRIPTION_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            subscription = await self.uow.subscriptions.get_by_business(tenant.value)
            plan = subscription.plan_type if subscription else PlanType.FREE
            status = subscription.status if subscription else SubscriptionStatus.ACTIVE

            history = await self.uow.subscriptions.list_usage(tenant.value, limit=12)
            now = utc_now()
            current = next(
                (u.job_count for u in history if u.month == now.month and u.year == now.year), 0
            )

            return Return.ok(
                UsageStatsResponse(
                    current_plan=plan.value,
                    status=status.value,
                    current_month_usage=current,
                    monthly_limit=job_limit(plan),
                    usage=[UsageEntry.from_entity(u) for u in history],
                )
            )
