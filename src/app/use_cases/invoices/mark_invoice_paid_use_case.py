import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, INVOICE_NOT_FOUND
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.entities import InvoiceStatus, PaymentMethod
from src.domain.permissions import Action, can

from .dtos import InvoiceResponse

logger = logging.getLogger(__name__)


class MarkInvoicePaidUseCase:
    """
    Use case for recording a payment.

    Business Rules:
    - A payment method is required
    - Sets status PAID and paid_at to now
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self, actor: Actor, invoice_id: UUID, payment_method: PaymentMethod
    ) -> Result[InvoiceResponse]:
        if not can(actor.role, Action.INVOICE_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            invoice = await self.uow.invoices.get(tenant.value, invoice_id)
            if invoice is None:
                return Return.err(INVOICE_NOT_FOUND)

            invoice.status = InvoiceStatus.PAID
            invoice.payment_method = PaymentMethod(payment_method)
            invoice.paid_at = utc_now()
            invoice = await self.uow.invoices.update(invoice)
            response = InvoiceResponse.from_entity(invoice)
            await self.uow.commit()

            logger.info(
                f"Invoice {invoice.invoice_number} marked paid ({invoice.payment_method.value})"
            )
            return Return.ok(response)
