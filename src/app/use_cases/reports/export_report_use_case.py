"""
Export Report Use Case

CSV rendering of the business period report.
"""

import csv
import io
import logging
from datetime import datetime
from typing import Optional

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, validation_error
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.permissions import Action, can

from .business_report_use_case import build_business_report, report_period
from .dtos import BusinessReportResponse, ReportExport, ReportType

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"


def _money(amount: float) -> str:
    return f"£{amount:.2f}"


def _day(value: Optional[datetime]) -> str:
    return value.strftime(DATE_FORMAT) if value else "N/A"


def render_report_csv(report: BusinessReportResponse, report_type: ReportType) -> str:
    """
    Sections in order: jobs, invoices, summary.

    Each section is a title row, a period row, a blank row, a header and the data
    rows. The summary is only included for ReportType.ALL.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    period = f"Period: {_day(report.period.start)} to {_day(report.period.end)}"

    if report_type in (ReportType.JOBS, ReportType.ALL):
        writer.writerows([["Jobs Report"], [period], []])
        writer.writerow(["Date", "Client", "Type", "Status", "Cleaner", "Amount"])
        for job in report.jobs:
            writer.writerow(
                [
                    _day(job.scheduled_date),
                    job.client.name if job.client else "",
                    job.type,
                    job.status,
                    job.cleaner.email if job.cleaner else "Unassigned",
                    _money(job.invoice.total_amount) if job.invoice else "N/A",
                ]
            )
        writer.writerow([])

    if report_type in (ReportType.INVOICES, ReportType.ALL):
        writer.writerows([["Invoices Report"], [period], []])
        writer.writerow(["Invoice Number", "Client", "Amount", "Status", "Due Date", "Paid Date"])
        for invoice in report.invoices:
            writer.writerow(
                [
                    invoice.invoice_number,
                    invoice.client.name if invoice.client else "",
                    _money(invoice.total_amount),
                    invoice.status,
                    _day(invoice.due_date),
                    _day(invoice.paid_at),
                ]
            )
        writer.writerow([])

    if report_type == ReportType.ALL:
        summary = report.summary
        writer.writerow(["Summary"])
        writer.writerows(
            [
                ["Total Jobs", summary.total_jobs],
                ["Completed Jobs", summary.completed_jobs],
                ["Total Clients", summary.total_clients],
                ["Total Revenue", _money(summary.total_revenue)],
                ["Unpaid Invoices", summary.unpaid_invoices],
                ["Unpaid Amount", _money(summary.unpaid_amount)],
            ]
        )

    return buffer.getvalue()


class ExportReportUseCase:
    """
    Use case for downloading the business report as CSV.

    Business Rules:
    - Owners only; same period defaults as the business report
    - File is named report-<YYYY-MM-DD>.csv after the export day
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self,
        actor: Actor,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        report_type: ReportType = ReportType.ALL,
    ) -> Result[ReportExport]:
        if not can(actor.role, Action.REPORT_VIEW):
            return Return.err(FORBIDDEN)

        report_type = ReportType(report_type)
        start, end = report_period(start, end)
        if start > end:
            return Return.err(
                validation_error({"start_date": ["Start date must be before end date"]})
            )

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            report = await build_business_report(self.uow, tenant.value, start, end)

        logger.info(f"Exported {report_type.value} report for business {tenant.value}")
        return Return.ok(
            ReportExport(
                file_name=f"report-{utc_now().date().isoformat()}.csv",
                content=render_report_csv(report, report_type),
            )
        )
