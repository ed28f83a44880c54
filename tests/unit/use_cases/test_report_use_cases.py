from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.reports import (
    ExportReportUseCase,
    GetBusinessReportUseCase,
    GetClientReportUseCase,
    ReportType,
)
from src.domain.entities import Client, Invoice, InvoiceStatus, Job, JobStatus

START = datetime(2024, 6, 1)
END = datetime(2024, 7, 1)


@pytest.fixture
def jane(business_id):
    return Client(business_id=business_id, name="Jane Smith")


@pytest.fixture
def period_rows(mock_uow, business_id, jane):
    """Three jobs for two clients and three invoices (one PAID, two UNPAID)"""
    other_client = uuid4()
    jobs = [
        Job(
            business_id=business_id,
            client_id=jane.id,
            scheduled_date=datetime(2024, 6, 3, 9),
            status=JobStatus.COMPLETED,
        ),
        Job(business_id=business_id, client_id=jane.id, scheduled_date=datetime(2024, 6, 10, 9)),
        Job(
            business_id=business_id, client_id=other_client, scheduled_date=datetime(2024, 6, 12, 9)
        ),
    ]
    invoices = [
        Invoice(
            business_id=business_id,
            client_id=jane.id,
            invoice_number="INV-000001",
            amount=100,
            vat_amount=20,
            total_amount=120,
            status=InvoiceStatus.PAID,
            due_date=datetime(2024, 7, 3),
            paid_at=datetime(2024, 6, 10),
        ),
        Invoice(
            business_id=business_id,
            client_id=jane.id,
            invoice_number="INV-000002",
            amount=60,
            total_amount=60,
            due_date=datetime(2024, 7, 10),
        ),
        Invoice(
            business_id=business_id,
            client_id=other_client,
            invoice_number="INV-000003",
            amount=40,
            total_amount=40,
            due_date=datetime(2024, 7, 12),
        ),
    ]
    mock_uow.jobs.list.return_value = jobs
    mock_uow.invoices.list.return_value = invoices
    mock_uow.invoices.list_by_jobs.return_value = []
    mock_uow.clients.get_many.return_value = [jane]
    mock_uow.jobs.get_many.return_value = []
    mock_uow.jobs.list_checklist.return_value = []
    mock_uow.jobs.list_photos.return_value = []
    return mock_uow


@pytest.mark.asyncio
async def test_business_report_totals(period_rows, tenants, business_id, owner):
    result = await GetBusinessReportUseCase(period_rows, tenants).execute(owner, START, END)

    summary = result.value.summary
    assert summary.total_jobs == 3
    assert summary.completed_jobs == 1
    assert summary.total_clients == 2
    assert summary.total_revenue == 120
    assert summary.unpaid_invoices == 2
    assert summary.unpaid_amount == 100
    period_rows.jobs.list.assert_called_once_with(business_id, start=START, end=END)
    period_rows.invoices.list.assert_called_once_with(
        business_id, created_from=START, created_before=END
    )


@pytest.mark.asyncio
async def test_business_report_lists_newest_jobs_first(period_rows, tenants, owner):
    result = await GetBusinessReportUseCase(period_rows, tenants).execute(owner, START, END)

    dates = [job.scheduled_date for job in result.value.jobs]
    assert dates == sorted(dates, reverse=True)


@pytest.mark.asyncio
async def test_business_report_defaults_to_last_30_days(period_rows, tenants, owner):
    result = await GetBusinessReportUseCase(period_rows, tenants).execute(owner)

    period = result.value.period
    assert period.end - period.start == timedelta(days=30)


@pytest.mark.asyncio
async def test_report_period_must_not_be_reversed(mock_uow, tenants, owner):
    result = await GetBusinessReportUseCase(mock_uow, tenants).execute(owner, END, START)

    assert result.error.code == "VALIDATION_ERROR"
    assert "start_date" in result.error.details
    tenants.resolve.assert_not_called()


@pytest.mark.asyncio
async def test_cleaners_cannot_read_reports(mock_uow, tenants, cleaner):
    business = await GetBusinessReportUseCase(mock_uow, tenants).execute(cleaner)
    client = await GetClientReportUseCase(mock_uow, tenants).execute(cleaner, uuid4())
    export = await ExportReportUseCase(mock_uow, tenants).execute(cleaner)

    assert business.error.code == "FORBIDDEN"
    assert client.error.code == "FORBIDDEN"
    assert export.error.code == "FORBIDDEN"
    tenants.resolve.assert_not_called()


@pytest.mark.asyncio
async def test_client_report_counts_paid_spend(mock_uow, tenants, business_id, owner, jane):
    done = Job(
        business_id=business_id,
        client_id=jane.id,
        scheduled_date=datetime(2024, 6, 3, 9),
        status=JobStatus.COMPLETED,
    )
    upcoming = Job(business_id=business_id, client_id=jane.id, scheduled_date=datetime(2024, 6, 10))
    mock_uow.clients.get.return_value = jane
    mock_uow.clients.get_many.return_value = [jane]
    mock_uow.jobs.list.return_value = [done, upcoming]
    mock_uow.jobs.list_checklist.return_value = []
    mock_uow.jobs.list_photos.return_value = []
    mock_uow.invoices.list_by_jobs.return_value = [
        Invoice(
            business_id=business_id,
            client_id=jane.id,
            job_id=done.id,
            invoice_number="INV-000001",
            amount=80,
            total_amount=80,
            status=InvoiceStatus.PAID,
            due_date=datetime(2024, 7, 3),
        ),
        Invoice(
            business_id=business_id,
            client_id=jane.id,
            job_id=upcoming.id,
            invoice_number="INV-000002",
            amount=50,
            total_amount=50,
            due_date=datetime(2024, 7, 10),
        ),
    ]

    result = await GetClientReportUseCase(mock_uow, tenants).execute(owner, jane.id)

    report = result.value
    assert report.client.name == "Jane Smith"
    assert report.total_jobs == 2
    assert report.completed_jobs == 1
    assert report.total_spent == 80
    assert [job.id for job in report.jobs] == [str(upcoming.id), str(done.id)]


@pytest.mark.asyncio
async def test_client_report_for_unknown_client(mock_uow, tenants, owner):
    mock_uow.clients.get.return_value = None

    result = await GetClientReportUseCase(mock_uow, tenants).execute(owner, uuid4())

    assert result.error.code == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_csv_export_with_summary(period_rows, tenants, owner):
    result = await ExportReportUseCase(period_rows, tenants).execute(owner, START, END)

    lines = result.value.content.splitlines()
    assert result.value.file_name.startswith("report-")
    assert result.value.file_name.endswith(".csv")
    assert lines[:4] == [
        "Jobs Report",
        "Period: 01/06/2024 to 01/07/2024",
        "",
        "Date,Client,Type,Status,Cleaner,Amount",
    ]
    assert "12/06/2024,,ONE_OFF,SCHEDULED,Unassigned,N/A" in lines
    assert "INV-000001,Jane Smith,£120.00,PAID,03/07/2024,10/06/2024" in lines
    assert "INV-000002,Jane Smith,£60.00,UNPAID,10/07/2024,N/A" in lines
    assert lines[-6:] == [
        "Total Jobs,3",
        "Completed Jobs,1",
        "Total Clients,2",
        "Total Revenue,£120.00",
        "Unpaid Invoices,2",
        "Unpaid Amount,£100.00",
    ]


@pytest.mark.asyncio
async def test_csv_export_of_invoices_only(period_rows, tenants, owner):
    result = await ExportReportUseCase(period_rows, tenants).execute(
        owner, START, END, ReportType.INVOICES
    )

    content = result.value.content
    assert content.startswith("Invoices Report\n")
    assert "Jobs Report" not in content
    assert "Summary" not in content
