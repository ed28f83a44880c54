from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Invoice, InvoiceStatus


class IInvoiceRepository(ABC):
    """Invoice repository interface - every lookup is scoped to a business"""

    @abstractmethod
    async def get(self, business_id: UUID, invoice_id: UUID) -> Optional[Invoice]:
        """Get an invoice of a business"""
        pass

    @abstractmethod
    async def list(
        self,
        business_id: UUID,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None,
        created_from: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
    ) -> List[Invoice]:
        """Invoices of a business, newest first; created_before is exclusive"""
        pass

    @abstractmethod
    async def list_by_jobs(self, business_id: UUID, job_ids: List[UUID]) -> List[Invoice]:
        """Invoices attached to the given jobs"""
        pass

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """Create a new invoice"""
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """Update existing invoice"""
        pass

    @abstractmethod
    async def init_sequence(self, business_id: UUID) -> None:
        """Create the invoice number counter for a new business"""
        pass

    @abstractmethod
    async def next_sequence(self, business_id: UUID) -> int:
        """Atomically increment and return the business's invoice counter"""
        pass

    @abstractmethod
    async def count_by_business(self, business_id: UUID) -> int:
        """Number of invoices of a business"""
        pass

    @abstractmethod
    async def count_unpaid(self, business_id: UUID) -> int:
        """Number of UNPAID invoices"""
        pass

    @abstractmethod
    async def sum_paid_between(self, business_id: UUID, start: datetime, end: datetime) -> float:
        """Sum of total_amount of invoices paid in [start, end)"""
        pass

    @abstractmethod
    async def list_unpaid_due_between(self, start: datetime, end: datetime) -> List[Invoice]:
        """UNPAID invoices of every business due in [start, end]"""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Number of invoices across all businesses"""
        pass

    @abstractmethod
    async def sum_all_paid(self) -> float:
        """Revenue across all businesses"""
        pass
