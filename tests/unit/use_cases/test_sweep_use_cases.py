from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.services.errors import ProviderError
from src.app.use_cases.sweeps import (
    RenewRecurringJobsUseCase,
    SendJobRemindersUseCase,
    SendPaymentRemindersUseCase,
)
from src.domain.entities import (
    Business,
    Client,
    Invoice,
    Job,
    JobFrequency,
    JobStatus,
    JobType,
    User,
    UserRole,
)

NOW = datetime(2024, 6, 9, 9, 30)


@pytest.fixture
def email_sender():
    return AsyncMock()


@pytest.fixture
def owner_user():
    return User(email="owner@sparkle.co.uk", role=UserRole.OWNER)


@pytest.fixture
def business(owner_user):
    return Business(user_id=owner_user.id, name="Sparkle")


@pytest.fixture
def client_row(business):
    return Client(business_id=business.id, name="Jane Smith", email="jane@example.com")


def _job(business, client_row, **fields):
    values = dict(
        business_id=business.id,
        client_id=client_row.id,
        scheduled_date=datetime(2024, 6, 10, 10, 0),
        reminder_time="1 day",
    )
    values.update(fields)
    return Job(**values)


@pytest.fixture
def reminder_repo(mock_uow, business, client_row, owner_user):
    mock_uow.clients.get.return_value = client_row
    mock_uow.businesses.get_by_id.return_value = business
    mock_uow.users.get_by_id.return_value = owner_user
    mock_uow.jobs.update.side_effect = lambda job: job
    return mock_uow


@pytest.mark.asyncio
async def test_due_job_reminds_owner_and_client_once(
    reminder_repo, email_sender, business, client_row
):
    job = _job(business, client_row)
    reminder_repo.jobs.list_pending_reminders.return_value = [job]
    reminder_repo.jobs.get.return_value = job

    result = await SendJobRemindersUseCase(reminder_repo, email_sender).execute(NOW)

    assert result.value.processed == 1
    recipients = [call.kwargs["to"] for call in email_sender.send.call_args_list]
    assert recipients == ["owner@sparkle.co.uk", "jane@example.com"]
    assert job.reminder_sent is True
    reminder_repo.commit.assert_called_once()


@pytest.mark.asyncio
async def test_job_outside_window_is_skipped(reminder_repo, email_sender, business, client_row):
    job = _job(business, client_row, scheduled_date=datetime(2024, 6, 12, 10, 0))
    reminder_repo.jobs.list_pending_reminders.return_value = [job]

    result = await SendJobRemindersUseCase(reminder_repo, email_sender).execute(NOW)

    assert result.value.examined == 1
    assert result.value.processed == 0
    email_sender.send.assert_not_called()
    assert job.reminder_sent is False


@pytest.mark.asyncio
async def test_email_failure_still_sets_latch(reminder_repo, email_sender, business, client_row):
    job = _job(business, client_row)
    reminder_repo.jobs.list_pending_reminders.return_value = [job]
    reminder_repo.jobs.get.return_value = job
    email_sender.send.side_effect = ProviderError("email", "down")

    result = await SendJobRemindersUseCase(reminder_repo, email_sender).execute(NOW)

    assert result.value.processed == 1
    assert job.reminder_sent is True


@pytest.mark.asyncio
async def test_one_broken_job_does_not_stop_the_sweep(
    reminder_repo, email_sender, business, client_row
):
    broken = _job(business, client_row)
    healthy = _job(business, client_row)
    reminder_repo.jobs.list_pending_reminders.return_value = [broken, healthy]
    reminder_repo.jobs.get.side_effect = [None, healthy]

    result = await SendJobRemindersUseCase(reminder_repo, email_sender).execute(NOW)

    assert result.value.failed == 1
    assert result.value.processed == 1
    reminder_repo.rollback.assert_called_once()
    assert healthy.reminder_sent is True


@pytest.mark.asyncio
async def test_completed_recurring_job_gets_next_occurrence(mock_uow, business, client_row):
    done = _job(
        business,
        client_row,
        type=JobType.RECURRING,
        frequency=JobFrequency.BI_WEEKLY,
        status=JobStatus.COMPLETED,
        scheduled_date=datetime(2024, 6, 5, 9, 0),
    )
    mock_uow.jobs.list_completed_recurring_since.return_value = [done]
    mock_uow.jobs.exists_between.return_value = False
    mock_uow.jobs.create.side_effect = lambda job: job

    result = await RenewRecurringJobsUseCase(mock_uow).execute(NOW)

    assert result.value.processed == 1
    created = mock_uow.jobs.create.call_args.args[0]
    assert created.scheduled_date == datetime(2024, 6, 19, 9, 0)
    assert created.status == JobStatus.SCHEDULED
    assert created.id != done.id
    mock_uow.jobs.list_completed_recurring_since.assert_called_once_with(NOW - timedelta(days=7))


@pytest.mark.asyncio
async def test_existing_nearby_job_prevents_duplicate(mock_uow, business, client_row):
    done = _job(
        business,
        client_row,
        type=JobType.RECURRING,
        frequency=JobFrequency.WEEKLY,
        status=JobStatus.COMPLETED,
    )
    mock_uow.jobs.list_completed_recurring_since.return_value = [done]
    mock_uow.jobs.exists_between.return_value = True

    result = await RenewRecurringJobsUseCase(mock_uow).execute(NOW)

    assert result.value.processed == 0
    mock_uow.jobs.create.assert_not_called()


@pytest.mark.asyncio
async def test_payment_reminder_goes_to_client(mock_uow, email_sender, business, client_row):
    invoice = Invoice(
        business_id=business.id,
        client_id=client_row.id,
        invoice_number="INV-000007",
        amount=100,
        total_amount=120,
        due_date=NOW + timedelta(days=2),
    )
    mock_uow.invoices.list_unpaid_due_between.return_value = [invoice]
    mock_uow.clients.get.return_value = client_row
    mock_uow.businesses.get_by_id.return_value = business

    result = await SendPaymentRemindersUseCase(mock_uow, email_sender).execute(NOW)

    assert result.value.processed == 1
    email = email_sender.send.call_args.kwargs
    assert email["to"] == "jane@example.com"
    assert email["subject"] == "Payment Reminder: Invoice INV-000007 Due in 2 days"
    assert "£120.00" in email["text"]


@pytest.mark.asyncio
async def test_client_without_email_is_skipped(mock_uow, email_sender, business):
    client_row = Client(business_id=business.id, name="No Email", notes={"gate": "1234"})
    mock_uow.invoices.list_unpaid_due_between.return_value = [
        Invoice(
            business_id=business.id,
            client_id=client_row.id,
            invoice_number="INV-000008",
            amount=50,
            total_amount=50,
            due_date=NOW + timedelta(days=1),
        )
    ]
    mock_uow.clients.get.return_value = client_row
    mock_uow.businesses.get_by_id.return_value = business

    result = await SendPaymentRemindersUseCase(mock_uow, email_sender).execute(NOW)

    assert result.value.processed == 0
    email_sender.send.assert_not_called()
