from typing import Optional

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, validation_error
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.billing import month_bounds
from src.domain.permissions import Action, can

from .dtos import MonthlyEarningsResponse, UnpaidCountResponse


class InvoiceStatsUseCase:
    """Unpaid invoice count and monthly earnings of the caller's business"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def unpaid_count(self, actor: Actor) -> Result[UnpaidCountResponse]:
        if not can(actor.role, Action.INVOICE_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            return Return.ok(
                UnpaidCountResponse(count=await self.uow.invoices.count_unpaid(tenant.value))
            )

    async def monthly_earnings(
        self, actor: Actor, month: Optional[int] = None, year: Optional[int] = None
    ) -> Result[MonthlyEarningsResponse]:
        """Sum of PAID totals for invoices paid in the month (defaults to this month)"""
        if not can(actor.role, Action.INVOICE_VIEW):
            return Return.err(FORBIDDEN)

        now = utc_now()
        month = month or now.month
        year = year or now.year
        if not 1 <= month <= 12:
            return Return.err(validation_error({"month": ["Month must be between 1 and 12"]}))

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            start, end = month_bounds(month, year)
            total = await self.uow.invoices.sum_paid_between(tenant.value, start, end)
            return Return.ok(MonthlyEarningsResponse(month=month, year=year, total=total))
