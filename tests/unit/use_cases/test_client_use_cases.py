from uuid import uuid4

import pytest

from src.app.use_cases.clients import DeleteClientUseCase, ListClientJobsUseCase
from src.domain.base import utc_now
from src.domain.entities import Client, Invoice, Job, JobStatus


@pytest.fixture
def client_row(business_id):
    return Client(business_id=business_id, name="Jane Smith")


@pytest.mark.asyncio
async def test_client_with_invoices_cannot_be_deleted(mock_uow, tenants, owner, client_row):
    mock_uow.clients.get.return_value = client_row
    mock_uow.invoices.list.return_value = [
        Invoice(
            business_id=client_row.business_id,
            client_id=client_row.id,
            invoice_number="INV-000001",
            amount=100,
            total_amount=100,
            due_date=utc_now(),
        )
    ]

    result = await DeleteClientUseCase(mock_uow, tenants).execute(owner, client_row.id)

    assert result.error.code == "CLIENT_HAS_INVOICES"
    mock_uow.clients.delete.assert_not_called()


@pytest.mark.asyncio
async def test_client_deleted_with_jobs(mock_uow, tenants, owner, client_row):
    jobs = [
        Job(business_id=client_row.business_id, client_id=client_row.id, scheduled_date=utc_now())
        for _ in range(2)
    ]
    mock_uow.clients.get.return_value = client_row
    mock_uow.invoices.list.return_value = []
    mock_uow.jobs.list.return_value = jobs

    result = await DeleteClientUseCase(mock_uow, tenants).execute(owner, client_row.id)

    assert result.value.deleted_jobs == 2
    assert mock_uow.jobs.delete.call_count == 2
    mock_uow.clients.delete.assert_called_once_with(client_row)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_client_is_not_found(mock_uow, tenants, owner):
    mock_uow.clients.get.return_value = None

    result = await DeleteClientUseCase(mock_uow, tenants).execute(owner, uuid4())

    assert result.error.code == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_cleaner_cannot_delete_clients(mock_uow, tenants, cleaner):
    result = await DeleteClientUseCase(mock_uow, tenants).execute(cleaner, uuid4())

    assert result.error.code == "FORBIDDEN"
    tenants.resolve.assert_not_called()


@pytest.mark.asyncio
async def test_client_with_completed_job_cannot_be_deleted(mock_uow, tenants, owner, client_row):
    mock_uow.clients.get.return_value = client_row
    mock_uow.invoices.list.return_value = []
    mock_uow.jobs.list.return_value = [
        Job(business_id=client_row.business_id, client_id=client_row.id, scheduled_date=utc_now()),
        Job(
            business_id=client_row.business_id,
            client_id=client_row.id,
            scheduled_date=utc_now(),
            status=JobStatus.COMPLETED,
        ),
    ]

    result = await DeleteClientUseCase(mock_uow, tenants).execute(owner, client_row.id)

    assert result.error.code == "CLIENT_HAS_ACTIVE_JOBS"
    mock_uow.jobs.delete.assert_not_called()
    mock_uow.clients.delete.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_client_job_history_is_limited_to_own_jobs_for_cleaners(
    mock_uow, tenants, business_id, cleaner, client_row
):
    mock_uow.clients.get.return_value = client_row
    mock_uow.jobs.list.return_value = []

    result = await ListClientJobsUseCase(mock_uow, tenants).execute(cleaner, client_row.id)

    assert result.value == []
    mock_uow.jobs.list.assert_called_once_with(
        business_id, cleaner_id=cleaner.id, client_id=client_row.id
    )


@pytest.mark.asyncio
async def test_owner_sees_full_client_job_history(
    mock_uow, tenants, business_id, owner, client_row
):
    mock_uow.clients.get.return_value = client_row
    mock_uow.jobs.list.return_value = []

    await ListClientJobsUseCase(mock_uow, tenants).execute(owner, client_row.id)

    mock_uow.jobs.list.assert_called_once_with(
        business_id, cleaner_id=None, client_id=client_row.id
    )
