from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients.dtos import ClientResponse
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN
from src.app.use_cases.jobs.views import build_job_views
from src.domain.actor import Actor
from src.domain.entities import InvoiceStatus, JobStatus
from src.domain.permissions import Action, can

from .dtos import ClientReportResponse


class GetClientReportUseCase:
    """
    Use case for a client's lifetime report.

    Business Rules:
    - Owners only; clients of other businesses are not found
    - total_spent sums the PAID invoices of the client's jobs
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, client_id: UUID) -> Result[ClientReportResponse]:
        if not can(actor.role, Action.REPORT_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            client = await self.uow.clients.get(business_id, client_id)
            if client is None:
                return Return.err(CLIENT_NOT_FOUND)

            jobs = await self.uow.jobs.list(business_id, client_id=client.id)
            views = await build_job_views(
                self.uow, business_id, list(reversed(jobs)), include_invoices=True
            )
            total_spent = sum(
                v.invoice.total_amount
                for v in views
                if v.invoice and v.invoice.status == InvoiceStatus.PAID.value
            )
            return Return.ok(
                ClientReportResponse(
                    client=ClientResponse.from_entity(client),
                    total_jobs=len(jobs),
                    completed_jobs=sum(1 for j in jobs if j.status == JobStatus.COMPLETED),
                    total_spent=round(total_spent, 2),
                    jobs=views,
                )
            )
