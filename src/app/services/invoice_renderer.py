from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Business, Client, Invoice, Job


class IInvoiceRenderer(ABC):
    """Printable invoice documents"""

    @abstractmethod
    def render(
        self, invoice: Invoice, business: Business, client: Client, job: Optional[Job] = None
    ) -> bytes:
        """Render an invoice as PDF bytes"""
        pass
