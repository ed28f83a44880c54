from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.sweeps import SendJobRemindersUseCase
from src.domain.base import utc_now


async def _job_at(client: AsyncClient, headers, when) -> str:
    await client.post("/business", json={"name": "Sparkle"}, headers=headers)
    created = await client.post(
        "/clients", json={"name": "Jane Smith", "email": "jane@example.com"}, headers=headers
    )
    job = await client.post(
        "/jobs",
        json={
            "client_id": created.json()["id"],
            "scheduled_date": when.isoformat(),
            "reminder_time": "1 day",
        },
        headers=headers,
    )
    return job.json()["job"]["id"]


@pytest.mark.asyncio
async def test_reminder_sent_once_across_sweeps(
    client: AsyncClient, identity, email_sender, db_session
):
    """
    Given a job whose one-day reminder falls inside the current hour
    When the sweep runs twice
    Then the owner and the client are emailed once
    """
    now = utc_now()
    await _job_at(client, identity.auth("owner@sparkle.co.uk"), now + timedelta(days=1, minutes=30))
    email_sender.sent.clear()

    sweep = SendJobRemindersUseCase(SqlAlchemyUnitOfWork(db_session), email_sender)
    first = await sweep.execute(now)
    second = await sweep.execute(now + timedelta(minutes=10))

    assert first.value.processed == 1
    assert second.value.processed == 0
    assert sorted(mail["to"] for mail in email_sender.sent) == [
        "jane@example.com",
        "owner@sparkle.co.uk",
    ]


@pytest.mark.asyncio
async def test_job_booked_inside_lead_time_is_not_reminded(
    client: AsyncClient, identity, email_sender, db_session
):
    now = utc_now()
    await _job_at(client, identity.auth("owner@sparkle.co.uk"), now + timedelta(hours=3))
    email_sender.sent.clear()

    sweep = SendJobRemindersUseCase(SqlAlchemyUnitOfWork(db_session), email_sender)
    result = await sweep.execute(now)

    assert result.value.processed == 0
    assert email_sender.sent == []
