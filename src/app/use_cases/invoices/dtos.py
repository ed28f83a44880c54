"""
Invoice Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Client, Invoice, Job


class InvoiceClientSummary(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class InvoiceJobSummary(BaseModel):
    id: str
    type: str
    scheduled_date: datetime
    status: str


class InvoiceResponse(BaseModel):
    """Invoice with its client and job summaries"""

    id: str
    business_id: str
    job_id: Optional[str] = None
    client_id: str
    invoice_number: str
    amount: float
    vat_amount: float
    total_amount: float
    status: str
    due_date: datetime
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime
    client: Optional[InvoiceClientSummary] = None
    job: Optional[InvoiceJobSummary] = None

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        client: Optional[Client] = None,
        job: Optional[Job] = None,
        is_overdue: bool = False,
    ) -> "InvoiceResponse":
        return cls(
            id=str(invoice.id),
            business_id=str(invoice.business_id),
            job_id=str(invoice.job_id) if invoice.job_id else None,
            client_id=str(invoice.client_id),
            invoice_number=invoice.invoice_number,
            amount=invoice.amount,
            vat_amount=invoice.vat_amount,
            total_amount=invoice.total_amount,
            status=invoice.status.value,
            due_date=invoice.due_date,
            payment_method=invoice.payment_method.value if invoice.payment_method else None,
            paid_at=invoice.paid_at,
            is_overdue=is_overdue,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
            client=InvoiceClientSummary(
                id=str(client.id), name=client.name, email=client.email, phone=client.phone
            )
            if client
            else None,
            job=InvoiceJobSummary(
                id=str(job.id),
                type=job.type.value,
                scheduled_date=job.scheduled_date,
                status=job.status.value,
            )
            if job
            else None,
        )


class InvoiceDocument(BaseModel):
    """Rendered PDF of an invoice"""

    file_name: str
    content: bytes


class UnpaidCountResponse(BaseModel):
    count: int


class MonthlyEarningsResponse(BaseModel):
    month: int
    year: int
    total: float
