from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.domain.base import utc_now


async def _paid_job(client: AsyncClient, headers):
    """One completed job invoiced for 100 and paid in cash"""
    await client.post("/business", json={"name": "Sparkle"}, headers=headers)
    created = await client.post("/clients", json={"name": "Jane Smith"}, headers=headers)
    client_id = created.json()["id"]
    when = (utc_now() + timedelta(days=1)).isoformat()
    job = await client.post(
        "/jobs",
        json={"client_id": client_id, "scheduled_date": when},
        headers=headers,
    )
    job_id = job.json()["job"]["id"]
    for status in ("IN_PROGRESS", "COMPLETED"):
        await client.put(f"/jobs/{job_id}", json={"status": status}, headers=headers)
    invoice = await client.post(
        f"/invoices/from-job/{job_id}", json={"amount": 100}, headers=headers
    )
    await client.post(
        f"/invoices/{invoice.json()['id']}/mark-paid",
        json={"payment_method": "CASH"},
        headers=headers,
    )
    return client_id


def _window():
    now = utc_now()
    return {
        "start_date": (now - timedelta(days=1)).isoformat(),
        "end_date": (now + timedelta(days=2)).isoformat(),
    }


@pytest.mark.asyncio
async def test_business_report_for_period(client: AsyncClient, identity):
    """
    Given a completed job that was invoiced and paid
    When the owner reads the business report around it
    Then the job, the invoice and the revenue are reported
    """
    owner = identity.auth("owner@sparkle.co.uk")
    await _paid_job(client, owner)

    response = await client.get("/reports/business", params=_window(), headers=owner)

    assert response.status_code == 200
    report = response.json()
    assert report["summary"]["total_jobs"] == 1
    assert report["summary"]["completed_jobs"] == 1
    assert report["summary"]["total_revenue"] == 100
    assert report["summary"]["unpaid_invoices"] == 0
    assert [i["invoice_number"] for i in report["invoices"]] == ["INV-000001"]


@pytest.mark.asyncio
async def test_client_report(client: AsyncClient, identity):
    owner = identity.auth("owner@sparkle.co.uk")
    client_id = await _paid_job(client, owner)

    response = await client.get(f"/reports/client/{client_id}", headers=owner)

    assert response.status_code == 200
    assert response.json()["total_spent"] == 100
    assert response.json()["completed_jobs"] == 1


@pytest.mark.asyncio
async def test_export_invoices_as_csv(client: AsyncClient, identity):
    owner = identity.auth("owner@sparkle.co.uk")
    await _paid_job(client, owner)

    response = await client.get(
        "/reports/export", params={**_window(), "type": "invoices"}, headers=owner
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"].startswith('attachment; filename="report-')
    assert "INV-000001,Jane Smith,£100.00,PAID" in response.text
    assert "Jobs Report" not in response.text


@pytest.mark.asyncio
async def test_unknown_export_type_is_rejected(client: AsyncClient, identity):
    owner = identity.auth("owner@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=owner)

    response = await client.get("/reports/export", params={"type": "payroll"}, headers=owner)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_cleaners_cannot_read_reports(client: AsyncClient, identity):
    cleaner = identity.auth("cleaner@sparkle.co.uk")
    await client.post("/auth/set-role", json={"role": "CLEANER"}, headers=cleaner)

    response = await client.get("/reports/business", headers=cleaner)

    assert response.status_code == 403
