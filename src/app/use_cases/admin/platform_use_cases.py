"""
Platform Admin Use Cases

Cross-tenant reporting for platform administrators.
"""

from datetime import timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.entities import Business, SubscriptionStatus
from src.domain.permissions import Action, can

from .dtos import (
    AdminBusinessDetail,
    AdminBusinessEntry,
    AdminUserEntry,
    BusinessCounts,
    BusinessPageResponse,
    OwnerSummary,
    Pagination,
    PlatformStatsResponse,
    RecentClient,
    RecentInvoice,
    RecentJob,
    SubscriptionSummary,
    UserPageResponse,
)

RECENT_WINDOW = timedelta(days=30)
RECENT_ROWS = 10
MAX_PAGE_SIZE = 100


def _page_bounds(page: int, limit: int):
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    return page, limit, (page - 1) * limit


class _AdminUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def _entry(self, business: Business) -> dict:
        owner = await self.uow.users.get_by_id(business.user_id)
        subscription = await self.uow.subscriptions.get_by_business(business.id)
        return dict(
            id=str(business.id),
            name=business.name,
            phone=business.phone,
            address=business.address,
            vat_enabled=business.vat_enabled,
            created_at=business.created_at,
            owner=OwnerSummary(
                id=str(owner.id), email=owner.email, role=owner.role.value,
                created_at=owner.created_at,
            )
            if owner
            else None,
            subscription=SubscriptionSummary(
                plan_type=subscription.plan_type.value,
                status=subscription.status.value,
                current_period_end=subscription.current_period_end,
            )
            if subscription
            else None,
            counts=BusinessCounts(
                clients=await self.uow.clients.count_by_business(business.id),
                jobs=await self.uow.jobs.count(business.id),
                invoices=await self.uow.invoices.count_by_business(business.id),
                cleaners=await self.uow.cleaners.count_by_business(business.id),
            ),
        )


class GetPlatformStatsUseCase(_AdminUseCase):
    async def execute(self, actor: Actor) -> Result[PlatformStatsResponse]:
        if not can(actor.role, Action.PLATFORM_ADMIN):
            return Return.err(FORBIDDEN)

        async with self.uow:
            by_status = await self.uow.subscriptions.count_by_status()
            by_plan = await self.uow.subscriptions.count_by_plan()
            by_role = await self.uow.users.count_by_role()
            return Return.ok(
                PlatformStatsResponse(
                    total_businesses=await self.uow.businesses.count(),
                    total_users=await self.uow.users.count(),
                    total_jobs=await self.uow.jobs.count_all(),
                    total_invoices=await self.uow.invoices.count_all(),
                    active_subscriptions=by_status.get(SubscriptionStatus.ACTIVE, 0),
                    total_revenue=await self.uow.invoices.sum_all_paid(),
                    recent_businesses=await self.uow.businesses.count(
                        created_since=utc_now() - RECENT_WINDOW
                    ),
                    businesses_by_plan={plan.value: n for plan, n in by_plan.items()},
                    users_by_role={role.value: n for role, n in by_role.items()},
                )
            )


class ListBusinessesUseCase(_AdminUseCase):
    """Businesses, newest first, with owner, plan and record counts"""

    async def execute(
        self, actor: Actor, page: int = 1, limit: int = 20
    ) -> Result[BusinessPageResponse]:
        if not can(actor.role, Action.PLATFORM_ADMIN):
            return Return.err(FORBIDDEN)

        page, limit, offset = _page_bounds(page, limit)
        async with self.uow:
            businesses = await self.uow.businesses.list_page(offset, limit)
            total = await self.uow.businesses.count()
            entries = [AdminBusinessEntry(**await self._entry(b)) for b in businesses]
            return Return.ok(
                BusinessPageResponse(
                    businesses=entries, pagination=Pagination.of(page, limit, total)
                )
            )


class GetBusinessDetailUseCase(_AdminUseCase):
    """One business with its latest clients, jobs and invoices"""

    async def execute(self, actor: Actor, business_id: UUID) -> Result[AdminBusinessDetail]:
        if not can(actor.role, Action.PLATFORM_ADMIN):
            return Return.err(FORBIDDEN)

        async with self.uow:
            business = await self.uow.businesses.get_by_id(business_id)
            if business is None:
                return Return.err(Error("BUSINESS_NOT_FOUND", "Business not found"))

            clients = sorted(
                await self.uow.clients.list(business.id), key=lambda c: c.created_at, reverse=True
            )[:RECENT_ROWS]
            jobs = sorted(
                await self.uow.jobs.list(business.id), key=lambda j: j.created_at, reverse=True
            )[:RECENT_ROWS]
            invoices = (await self.uow.invoices.list(business.id))[:RECENT_ROWS]
            names = {
                c.id: c.name
                for c in await self.uow.clients.get_many(
                    business.id, list({j.client_id for j in jobs})
                )
            }

            return Return.ok(
                AdminBusinessDetail(
                    **await self._entry(business),
                    recent_clients=[
                        RecentClient(id=str(c.id), name=c.name, created_at=c.created_at)
                        for c in clients
                    ],
                    recent_jobs=[
                        RecentJob(
                            id=str(j.id),
                            client_name=names.get(j.client_id),
                            scheduled_date=j.scheduled_date,
                            status=j.status.value,
                            created_at=j.created_at,
                        )
                        for j in jobs
                    ],
                    recent_invoices=[
                        RecentInvoice(
                            id=str(i.id),
                            invoice_number=i.invoice_number,
                            total_amount=i.total_amount,
                            status=i.status.value,
                            created_at=i.created_at,
                        )
                        for i in invoices
                    ],
                )
            )


class ListUsersUseCase(_AdminUseCase):
    """Users, newest first, with the business they own"""

    async def execute(
        self, actor: Actor, page: int = 1, limit: int = 20
    ) -> Result[UserPageResponse]:
        if not can(actor.role, Action.PLATFORM_ADMIN):
            return Return.err(FORBIDDEN)

        page, limit, offset = _page_bounds(page, limit)
        async with self.uow:
            users = await self.uow.users.list_page(offset, limit)
            total = await self.uow.users.count()
            owned = {
                b.user_id: b for b in await self.uow.businesses.list_by_owners([u.id for u in users])
            }

            entries = []
            for user in users:
                business = owned.get(user.id)
                entries.append(
                    AdminUserEntry(
                        id=str(user.id),
                        email=user.email,
                        role=user.role.value,
                        created_at=user.created_at,
                        business_id=str(business.id) if business else None,
                        business_name=business.name if business else None,
                    )
                )
            return Return.ok(
                UserPageResponse(users=entries, pagination=Pagination.of(page, limit, total))
            )
