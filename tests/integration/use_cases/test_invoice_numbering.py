import asyncio
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.tenant_resolver import TenantResolver
from src.app.use_cases.invoices import CreateInvoiceFromJobUseCase
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.entities import UserRole


@pytest.mark.asyncio
async def test_concurrent_invoices_get_distinct_numbers(client: AsyncClient, identity, engine):
    """
    Given two scheduled jobs of one business
    When both are invoiced at the same time from separate sessions
    Then each invoice gets its own number
    """
    owner = identity.auth("owner@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=owner)
    created = await client.post("/clients", json={"name": "Jane Smith"}, headers=owner)
    when = (utc_now() + timedelta(days=1)).isoformat()
    job_ids = []
    for _ in range(2):
        job = await client.post(
            "/jobs", json={"client_id": created.json()["id"], "scheduled_date": when}, headers=owner
        )
        job_ids.append(job.json()["job"]["id"])

    actor = Actor(
        id=identity.accounts["owner@sparkle.co.uk"]["id"],
        email="owner@sparkle.co.uk",
        role=UserRole.OWNER,
    )
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def invoice(job_id):
        async with Session() as session:
            uow = SqlAlchemyUnitOfWork(session)
            return await CreateInvoiceFromJobUseCase(uow, TenantResolver(uow)).execute(
                actor, job_id, 75
            )

    results = await asyncio.gather(*(invoice(job_id) for job_id in job_ids))

    assert all(result.is_ok() for result in results)
    numbers = {result.value.invoice_number for result in results}
    assert numbers == {"INV-000001", "INV-000002"}
