"""
Business Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Business


class BusinessResponse(BaseModel):
    """Business (tenant) profile"""

    id: str
    user_id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    vat_enabled: bool
    vat_number: Optional[str] = None
    invoice_template: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, business: Business) -> "BusinessResponse":
        return cls(
            id=str(business.id),
            user_id=str(business.user_id),
            name=business.name,
            phone=business.phone,
            address=business.address,
            vat_enabled=business.vat_enabled,
            vat_number=business.vat_number,
            invoice_template=business.invoice_template,
            created_at=business.created_at,
            updated_at=business.updated_at,
        )
