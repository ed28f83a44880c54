from typing import List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, INVOICE_NOT_FOUND
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.billing import is_overdue
from src.domain.entities import InvoiceStatus
from src.domain.permissions import Action, can

from .dtos import InvoiceResponse


class ListInvoicesUseCase:
    """Invoices of the caller's business, newest first"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self,
        actor: Actor,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> Result[List[InvoiceResponse]]:
        if not can(actor.role, Action.INVOICE_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            invoices = await self.uow.invoices.list(business_id, status=status, client_id=client_id)
            clients = {
                c.id: c
                for c in await self.uow.clients.get_many(
                    business_id, list({i.client_id for i in invoices})
                )
            }
            jobs = {
                j.id: j
                for j in await self.uow.jobs.get_many(
                    business_id, list({i.job_id for i in invoices if i.job_id})
                )
            }

            now = utc_now()
            return Return.ok(
                [
                    InvoiceResponse.from_entity(
                        invoice,
                        clients.get(invoice.client_id),
                        jobs.get(invoice.job_id),
                        is_overdue(invoice.status, invoice.due_date, now),
                    )
                    for invoice in invoices
                ]
            )


class GetInvoiceUseCase:
    """Single invoice; invoices of other businesses are reported as not found"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, invoice_id: UUID) -> Result[InvoiceResponse]:
        if not can(actor.role, Action.INVOICE_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            invoice = await self.uow.invoices.get(business_id, invoice_id)
            if invoice is None:
                return Return.err(INVOICE_NOT_FOUND)

            client = await self.uow.clients.get(business_id, invoice.client_id)
            job = await self.uow.jobs.get(business_id, invoice.job_id) if invoice.job_id else None
            return Return.ok(
                InvoiceResponse.from_entity(
                    invoice, client, job, is_overdue(invoice.status, invoice.due_date, utc_now())
                )
            )
