"""
PDF and WhatsApp renditions of an invoice.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.invoice_renderer import IInvoiceRenderer
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN, INVOICE_NOT_FOUND
from src.app.use_cases.jobs.dtos import WhatsAppLinkResponse
from src.domain.actor import Actor
from src.domain.permissions import Action, can
from src.domain.whatsapp import build_link, invoice_message

from .dtos import InvoiceDocument

logger = logging.getLogger(__name__)


class _InvoiceDocumentUseCase:
    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def _load(self, actor: Actor, invoice_id: UUID):
        """(invoice, business, client, job) of the caller's business"""
        tenant = await self.tenants.resolve(actor.id, actor.role)
        if tenant.is_err():
            return tenant
        business_id = tenant.value

        invoice = await self.uow.invoices.get(business_id, invoice_id)
        if invoice is None:
            return Return.err(INVOICE_NOT_FOUND)
        client = await self.uow.clients.get(business_id, invoice.client_id)
        if client is None:
            return Return.err(CLIENT_NOT_FOUND)
        business = await self.uow.businesses.get_by_id(business_id)
        job = await self.uow.jobs.get(business_id, invoice.job_id) if invoice.job_id else None
        return Return.ok((invoice, business, client, job))


class RenderInvoicePdfUseCase(_InvoiceDocumentUseCase):
    """Invoice as a downloadable PDF"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver, renderer: IInvoiceRenderer):
        super().__init__(uow, tenants)
        self.renderer = renderer

    async def execute(self, actor: Actor, invoice_id: UUID) -> Result[InvoiceDocument]:
        if not can(actor.role, Action.INVOICE_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await self._load(actor, invoice_id)
            if loaded.is_err():
                return loaded
            invoice, business, client, job = loaded.value

            content = self.renderer.render(invoice, business, client, job)
            return Return.ok(
                InvoiceDocument(file_name=f"invoice-{invoice.invoice_number}.pdf", content=content)
            )


class InvoiceWhatsAppLinkUseCase(_InvoiceDocumentUseCase):
    """wa.me link sending the invoice summary to the client"""

    async def execute(self, actor: Actor, invoice_id: UUID) -> Result[WhatsAppLinkResponse]:
        if not can(actor.role, Action.INVOICE_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await self._load(actor, invoice_id)
            if loaded.is_err():
                return loaded
            invoice, business, client, job = loaded.value

            if not client.phone:
                return Return.ok(WhatsAppLinkResponse.missing_phone())

            message = invoice_message(invoice, business, client, job)
            return Return.ok(
                WhatsAppLinkResponse(
                    whatsapp_url=build_link(client.phone, message),
                    phone=client.phone,
                    message=message,
                )
            )
