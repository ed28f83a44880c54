"""
Create Invoice From Job Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, JOB_NOT_FOUND, validation_error
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.billing import (
    calculate_total,
    calculate_vat,
    due_date_from,
    format_invoice_number,
    validate_amount,
)
from src.domain.entities import Invoice
from src.domain.permissions import Action, can

from .dtos import InvoiceResponse

logger = logging.getLogger(__name__)


class CreateInvoiceFromJobUseCase:
    """
    Use case for invoicing a job.

    Business Rules:
    - 0 < amount <= 100000 with at most two decimals
    - VAT at 20% only when the business has VAT enabled
    - Numbers are sequential per business: INV-000001, INV-000002, ...
    - Due 30 days after creation
    - One invoice per job
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, job_id: UUID, amount: float) -> Result[InvoiceResponse]:
        if not can(actor.role, Action.INVOICE_MANAGE):
            return Return.err(FORBIDDEN)

        problems = validate_amount(amount)
        if problems:
            return Return.err(validation_error({"amount": problems}))

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            job = await self.uow.jobs.get(business_id, job_id)
            if job is None:
                return Return.err(JOB_NOT_FOUND)

            if await self.uow.invoices.list_by_jobs(business_id, [job.id]):
                return Return.err(
                    Error("INVOICE_ALREADY_EXISTS", "This job has already been invoiced")
                )

            business = await self.uow.businesses.get_by_id(business_id)
            sequence = await self.uow.invoices.next_sequence(business_id)
            now = utc_now()

            invoice = await self.uow.invoices.create(
                Invoice(
                    business_id=business_id,
                    job_id=job.id,
                    client_id=job.client_id,
                    invoice_number=format_invoice_number(sequence),
                    amount=round(amount, 2),
                    vat_amount=calculate_vat(amount, business.vat_enabled),
                    total_amount=calculate_total(amount, business.vat_enabled),
                    due_date=due_date_from(now),
                )
            )
            client = await self.uow.clients.get(business_id, job.client_id)
            response = InvoiceResponse.from_entity(invoice, client, job)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} created for business {business_id}")
            return Return.ok(response)
