"""
Business Report Use Case

Period report over the caller's business: jobs by scheduled date, invoices by
creation date.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, validation_error
from src.app.use_cases.invoices.dtos import InvoiceResponse
from src.app.use_cases.jobs.views import build_job_views
from src.domain.actor import Actor
from src.domain.base import as_utc, utc_now
from src.domain.billing import is_overdue
from src.domain.entities import InvoiceStatus, JobStatus
from src.domain.permissions import Action, can

from .dtos import BusinessReportResponse, BusinessReportSummary, ReportPeriod

DEFAULT_REPORT_DAYS = 30


def report_period(
    start: Optional[datetime], end: Optional[datetime], now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """Missing bounds default to the last 30 days ending now"""
    end = as_utc(end) if end else (now or utc_now())
    start = as_utc(start) if start else end - timedelta(days=DEFAULT_REPORT_DAYS)
    return start, end


async def build_business_report(
    uow: UnitOfWork, business_id: UUID, start: datetime, end: datetime
) -> BusinessReportResponse:
    jobs = await uow.jobs.list(business_id, start=start, end=end)
    newest_first = list(reversed(jobs))
    job_views = await build_job_views(uow, business_id, newest_first, include_invoices=True)

    invoices = await uow.invoices.list(business_id, created_from=start, created_before=end)
    clients = {
        c.id: c
        for c in await uow.clients.get_many(business_id, list({i.client_id for i in invoices}))
    }
    invoiced_jobs = {
        j.id: j
        for j in await uow.jobs.get_many(
            business_id, list({i.job_id for i in invoices if i.job_id})
        )
    }
    now = utc_now()
    invoice_views = [
        InvoiceResponse.from_entity(
            invoice,
            clients.get(invoice.client_id),
            invoiced_jobs.get(invoice.job_id),
            is_overdue(invoice.status, invoice.due_date, now),
        )
        for invoice in invoices
    ]

    paid = [i.total_amount for i in invoices if i.status == InvoiceStatus.PAID]
    unpaid = [i.total_amount for i in invoices if i.status == InvoiceStatus.UNPAID]
    summary = BusinessReportSummary(
        total_jobs=len(jobs),
        completed_jobs=sum(1 for j in jobs if j.status == JobStatus.COMPLETED),
        total_clients=len({j.client_id for j in jobs}),
        total_revenue=round(sum(paid), 2),
        unpaid_invoices=len(unpaid),
        unpaid_amount=round(sum(unpaid), 2),
    )
    return BusinessReportResponse(
        period=ReportPeriod(start=start, end=end),
        summary=summary,
        jobs=job_views,
        invoices=invoice_views,
    )


class GetBusinessReportUseCase:
    """
    Use case for the business period report.

    Business Rules:
    - Owners only
    - Period defaults to the last 30 days; start must not be after end
    - Jobs are newest first; revenue counts PAID invoices, unpaid counts UNPAID
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self,
        actor: Actor,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Result[BusinessReportResponse]:
        if not can(actor.role, Action.REPORT_VIEW):
            return Return.err(FORBIDDEN)

        start, end = report_period(start, end)
        if start > end:
            return Return.err(
                validation_error({"start_date": ["Start date must be before end date"]})
            )

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            report = await build_business_report(self.uow, tenant.value, start, end)
            return Return.ok(report)
