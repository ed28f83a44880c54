import pytest
from httpx import AsyncClient

from src.domain.base import utc_now
from src.domain.entities import User, UserRole


@pytest.mark.asyncio
async def test_owner_dashboard_counts_today(client: AsyncClient, identity):
    owner = identity.auth("owner@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=owner)
    created = await client.post("/clients", json={"name": "Jane Smith"}, headers=owner)
    await client.post(
        "/jobs",
        json={"client_id": created.json()["id"], "scheduled_date": utc_now().isoformat()},
        headers=owner,
    )

    response = await client.get("/dashboard/stats", headers=owner)

    assert response.status_code == 200
    stats = response.json()
    assert stats["role"] == "OWNER"
    assert stats["today_jobs"] == 1
    assert stats["unpaid_invoices"] == 0


@pytest.mark.asyncio
async def test_admin_sees_platform_stats(client: AsyncClient, identity, db_session):
    """
    Given an ADMIN user and one owner with a business
    When the admin reads platform stats and the business list
    Then the owner's business is counted and listed
    """
    admin = identity.auth("admin@cleanops.app")
    db_session.add(
        User(
            id=identity.accounts["admin@cleanops.app"]["id"],
            email="admin@cleanops.app",
            role=UserRole.ADMIN,
        )
    )
    await db_session.commit()
    owner = identity.auth("owner@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=owner)

    stats = await client.get("/admin/stats", headers=admin)
    page = await client.get("/admin/businesses?page=1&limit=10", headers=admin)

    assert stats.status_code == 200
    assert stats.json()["total_businesses"] == 1
    assert [b["name"] for b in page.json()["businesses"]] == ["Sparkle"]
    assert page.json()["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_owner_cannot_use_admin_endpoints(client: AsyncClient, identity):
    response = await client.get("/admin/stats", headers=identity.auth("owner@sparkle.co.uk"))

    assert response.status_code == 403
