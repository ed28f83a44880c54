"""
Invoice Use Cases
"""

from .create_invoice_use_case import CreateInvoiceFromJobUseCase
from .dtos import (
    InvoiceDocument,
    InvoiceResponse,
    MonthlyEarningsResponse,
    UnpaidCountResponse,
)
from .invoice_documents_use_case import InvoiceWhatsAppLinkUseCase, RenderInvoicePdfUseCase
from .invoice_stats_use_case import InvoiceStatsUseCase
from .list_invoices_use_case import GetInvoiceUseCase, ListInvoicesUseCase
from .mark_invoice_paid_use_case import MarkInvoicePaidUseCase

__all__ = [
    "CreateInvoiceFromJobUseCase",
    "ListInvoicesUseCase",
    "GetInvoiceUseCase",
    "MarkInvoicePaidUseCase",
    "RenderInvoicePdfUseCase",
    "InvoiceWhatsAppLinkUseCase",
    "InvoiceStatsUseCase",
    "InvoiceResponse",
    "InvoiceDocument",
    "UnpaidCountResponse",
    "MonthlyEarningsResponse",
]
