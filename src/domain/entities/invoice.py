"""
Invoice Entities

Billable documents derived from jobs, and the per-business number sequence.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import InvoiceStatus, PaymentMethod


class Invoice(SQLModel, table=True):
    """
    Invoice entity.

    Business Rules:
    - total_amount == amount + vat_amount
    - vat_amount == 0 when the business has VAT disabled
    - invoice_number is unique per business (INV-000001, INV-000002, ...)
    - Due 30 days after creation
    - Never visible to cleaners
    """

    __tablename__ = "invoices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)
    job_id: Optional[UUID] = Field(default=None, foreign_key="jobs.id", index=True)
    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)

    invoice_number: str = Field(max_length=20)
    amount: float = Field(nullable=False)
    vat_amount: float = Field(default=0)
    total_amount: float = Field(nullable=False)

    status: InvoiceStatus = Field(default=InvoiceStatus.UNPAID)
    due_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    payment_method: Optional[PaymentMethod] = Field(default=None)
    paid_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("business_id", "invoice_number", name="uq_invoice_number"),
        Index("idx_invoice_status", "business_id", "status"),
    )


class InvoiceCounter(SQLModel, table=True):
    """Last invoice number issued per business, incremented atomically"""

    __tablename__ = "invoice_counters"

    business_id: UUID = Field(foreign_key="businesses.id", primary_key=True)
    last_value: int = Field(default=0, nullable=False)
