from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from src.api.error import to_http_error
from src.app.services.invoice_renderer import IInvoiceRenderer
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invoices import (
    CreateInvoiceFromJobUseCase,
    GetInvoiceUseCase,
    InvoiceResponse,
    InvoiceStatsUseCase,
    InvoiceWhatsAppLinkUseCase,
    ListInvoicesUseCase,
    MarkInvoicePaidUseCase,
    MonthlyEarningsResponse,
    RenderInvoicePdfUseCase,
    UnpaidCountResponse,
)
from src.app.use_cases.jobs import WhatsAppLinkResponse
from src.depends import (
    get_current_user,
    get_invoice_renderer,
    get_tenant_resolver,
    get_unit_of_work,
)
from src.domain.actor import Actor
from src.domain.entities import InvoiceStatus, PaymentMethod

router = APIRouter(prefix="/invoices", tags=["Invoices"])


class CreateInvoiceRequest(BaseModel):
    """Net amount to bill; VAT is added when the business has it enabled"""

    amount: float


class MarkPaidRequest(BaseModel):
    payment_method: PaymentMethod


@router.post(
    "/from-job/{job_id}", status_code=status.HTTP_201_CREATED, response_model=InvoiceResponse
)
async def create_invoice_from_job(
    job_id: UUID,
    request: CreateInvoiceRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Invoice a job with the next sequential number (INV-000001, ...)

    Raises:
        - 403 Forbidden: Caller cannot manage invoices
        - 404 Not Found: JOB_NOT_FOUND
        - 409 Conflict: INVOICE_ALREADY_EXISTS
        - 422 Unprocessable Entity: Invalid amount
    """
    result = await CreateInvoiceFromJobUseCase(uow, tenants).execute(
        actor, job_id, request.amount
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("", response_model=List[InvoiceResponse])
async def list_invoices(
    status: Optional[InvoiceStatus] = Query(None),
    client_id: Optional[UUID] = Query(None),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Invoices of the caller's business, newest first, with an is_overdue flag

    Raises:
        - 403 Forbidden: Caller cannot view invoices
    """
    result = await ListInvoicesUseCase(uow, tenants).execute(
        actor, status=status, client_id=client_id
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/stats/unpaid-count", response_model=UnpaidCountResponse)
async def unpaid_invoice_count(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """Number of UNPAID invoices"""
    result = await InvoiceStatsUseCase(uow, tenants).unpaid_count(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/stats/monthly-earnings", response_model=MonthlyEarningsResponse)
async def monthly_earnings(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """Sum of PAID invoice totals in a month (current month by default)"""
    result = await InvoiceStatsUseCase(uow, tenants).monthly_earnings(actor, month, year)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 404 Not Found: INVOICE_NOT_FOUND
    """
    result = await GetInvoiceUseCase(uow, tenants).execute(actor, invoice_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/{invoice_id}/mark-paid", response_model=InvoiceResponse)
async def mark_invoice_paid(
    invoice_id: UUID,
    request: MarkPaidRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Record the payment method and mark the invoice PAID

    Raises:
        - 403 Forbidden: Caller cannot manage invoices
        - 404 Not Found: INVOICE_NOT_FOUND
    """
    result = await MarkInvoicePaidUseCase(uow, tenants).execute(
        actor, invoice_id, request.payment_method
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{invoice_id}/pdf")
async def download_invoice_pdf(
    invoice_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
    renderer: IInvoiceRenderer = Depends(get_invoice_renderer),
):
    """
    Invoice rendered as a PDF attachment

    Raises:
        - 404 Not Found: INVOICE_NOT_FOUND
    """
    result = await RenderInvoicePdfUseCase(uow, tenants, renderer).execute(actor, invoice_id)

    if result.is_err():
        raise to_http_error(result.error)

    document = result.value
    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{document.file_name}"'},
    )


@router.get("/{invoice_id}/whatsapp-link", response_model=WhatsAppLinkResponse)
async def invoice_whatsapp_link(
    invoice_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """wa.me link sending the invoice summary to the client"""
    result = await InvoiceWhatsAppLinkUseCase(uow, tenants).execute(actor, invoice_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
