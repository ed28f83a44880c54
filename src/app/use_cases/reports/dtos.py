"""
Report Use Case DTOs
"""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel

from src.app.use_cases.clients.dtos import ClientResponse
from src.app.use_cases.invoices.dtos import InvoiceResponse
from src.app.use_cases.jobs.dtos import JobResponse


class ReportType(str, Enum):
    JOBS = "jobs"
    INVOICES = "invoices"
    ALL = "all"


class ReportPeriod(BaseModel):
    start: datetime
    end: datetime


class BusinessReportSummary(BaseModel):
    total_jobs: int = 0
    completed_jobs: int = 0
    total_clients: int = 0
    total_revenue: float = 0.0
    unpaid_invoices: int = 0
    unpaid_amount: float = 0.0


class BusinessReportResponse(BaseModel):
    """Jobs scheduled and invoices raised within a period, with totals"""

    period: ReportPeriod
    summary: BusinessReportSummary
    jobs: List[JobResponse] = []
    invoices: List[InvoiceResponse] = []


class ClientReportResponse(BaseModel):
    """Lifetime job history of one client; total_spent counts PAID invoices"""

    client: ClientResponse
    total_jobs: int
    completed_jobs: int
    total_spent: float
    jobs: List[JobResponse] = []


class ReportExport(BaseModel):
    file_name: str
    content: str
