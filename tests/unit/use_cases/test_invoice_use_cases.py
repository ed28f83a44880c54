from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.invoices import CreateInvoiceFromJobUseCase, MarkInvoicePaidUseCase
from src.domain.base import utc_now
from src.domain.entities import (
    Business,
    Client,
    Invoice,
    InvoiceStatus,
    Job,
    PaymentMethod,
)


@pytest.fixture
def job_row(business_id):
    return Job(business_id=business_id, client_id=uuid4(), scheduled_date=utc_now())


@pytest.fixture
def invoice_repo(mock_uow, business_id, owner, job_row):
    mock_uow.jobs.get.return_value = job_row
    mock_uow.invoices.list_by_jobs.return_value = []
    mock_uow.invoices.next_sequence.return_value = 1
    mock_uow.invoices.create.side_effect = lambda invoice: invoice
    mock_uow.invoices.update.side_effect = lambda invoice: invoice
    mock_uow.businesses.get_by_id.return_value = Business(
        id=business_id, user_id=owner.id, name="Sparkle"
    )
    mock_uow.clients.get.return_value = Client(
        id=job_row.client_id, business_id=business_id, name="Jane Smith"
    )
    return mock_uow


@pytest.mark.asyncio
async def test_first_invoice_without_vat(invoice_repo, tenants, owner, job_row):
    result = await CreateInvoiceFromJobUseCase(invoice_repo, tenants).execute(
        owner, job_row.id, 100
    )

    assert result.is_ok()
    invoice = result.value
    assert invoice.invoice_number == "INV-000001"
    assert invoice.vat_amount == 0
    assert invoice.total_amount == 100
    assert invoice.status == "UNPAID"
    assert invoice.client.name == "Jane Smith"
    assert invoice.due_date - invoice.created_at >= timedelta(days=29)
    invoice_repo.commit.assert_called_once()


@pytest.mark.asyncio
async def test_vat_added_when_enabled(invoice_repo, tenants, owner, job_row):
    invoice_repo.businesses.get_by_id.return_value.vat_enabled = True
    invoice_repo.invoices.next_sequence.return_value = 42

    result = await CreateInvoiceFromJobUseCase(invoice_repo, tenants).execute(
        owner, job_row.id, 80
    )

    assert result.value.invoice_number == "INV-000042"
    assert result.value.vat_amount == 16
    assert result.value.total_amount == 96


@pytest.mark.asyncio
async def test_job_can_only_be_invoiced_once(invoice_repo, tenants, owner, job_row, business_id):
    invoice_repo.invoices.list_by_jobs.return_value = [
        Invoice(
            business_id=business_id,
            job_id=job_row.id,
            client_id=job_row.client_id,
            invoice_number="INV-000001",
            amount=100,
            total_amount=100,
            due_date=utc_now(),
        )
    ]

    result = await CreateInvoiceFromJobUseCase(invoice_repo, tenants).execute(
        owner, job_row.id, 100
    )

    assert result.error.code == "INVOICE_ALREADY_EXISTS"
    invoice_repo.invoices.next_sequence.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_amount_is_rejected_before_numbering(invoice_repo, tenants, owner, job_row):
    result = await CreateInvoiceFromJobUseCase(invoice_repo, tenants).execute(
        owner, job_row.id, 12.345
    )

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details == {"amount": ["Amount can have maximum 2 decimal places"]}
    invoice_repo.invoices.next_sequence.assert_not_called()


@pytest.mark.asyncio
async def test_cleaners_cannot_invoice(invoice_repo, tenants, cleaner, job_row):
    result = await CreateInvoiceFromJobUseCase(invoice_repo, tenants).execute(
        cleaner, job_row.id, 100
    )

    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_mark_paid_records_method(invoice_repo, tenants, owner, business_id):
    invoice = Invoice(
        business_id=business_id,
        client_id=uuid4(),
        invoice_number="INV-000001",
        amount=100,
        total_amount=100,
        due_date=utc_now(),
    )
    invoice_repo.invoices.get.return_value = invoice

    result = await MarkInvoicePaidUseCase(invoice_repo, tenants).execute(
        owner, invoice.id, PaymentMethod.CARD
    )

    assert result.value.status == "PAID"
    assert result.value.payment_method == "CARD"
    assert invoice.status == InvoiceStatus.PAID
    assert invoice.paid_at is not None
