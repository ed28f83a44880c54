"""
Business Entity

The tenant. Everything else (clients, jobs, invoices, roster) hangs off it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class Business(SQLModel, table=True):
    """
    Business entity - a cleaning company owned by exactly one user.

    Business Rules:
    - One business per owner (unique user_id)
    - vat_number is cleared when VAT is disabled
    - invoice_template defaults to "classic"
    """

    __tablename__ = "businesses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    name: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)

    vat_enabled: bool = Field(default=False)
    vat_number: Optional[str] = Field(default=None, max_length=50)
    invoice_template: str = Field(default="classic", max_length=50)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
