from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.domain.base import utc_now


async def _business_with_client(client: AsyncClient, headers, name: str) -> str:
    response = await client.post("/business", json={"name": name}, headers=headers)
    assert response.status_code == 201
    response = await client.post("/clients", json={"name": f"{name} client"}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.asyncio
async def test_other_business_records_are_not_found(client: AsyncClient, identity):
    """
    Given two owners with one client each
    When owner B reads or edits owner A's client
    Then the client does not exist for owner B
    """
    owner_a = identity.auth("a@sparkle.co.uk")
    owner_b = identity.auth("b@shine.co.uk")
    client_a = await _business_with_client(client, owner_a, "Sparkle")
    await _business_with_client(client, owner_b, "Shine")

    assert (await client.get(f"/clients/{client_a}", headers=owner_b)).status_code == 404
    response = await client.put(
        f"/clients/{client_a}", json={"name": "Stolen"}, headers=owner_b
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CLIENT_NOT_FOUND"

    listed = (await client.get("/clients", headers=owner_b)).json()
    assert [c["name"] for c in listed] == ["Shine client"]


@pytest.mark.asyncio
async def test_one_business_per_owner(client: AsyncClient, identity):
    headers = identity.auth("a@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=headers)

    response = await client.post("/business", json={"name": "Sparkle Two"}, headers=headers)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_cleaner_sees_only_assigned_jobs(client: AsyncClient, identity, email_sender):
    """
    Given an owner with two jobs, one assigned to an invited cleaner
    When the cleaner lists jobs
    Then only the assigned job is returned and the other is not found
    """
    owner = identity.auth("owner@sparkle.co.uk")
    client_id = await _business_with_client(client, owner, "Sparkle")

    invited = await client.post(
        "/business/cleaners", json={"email": "cleaner@sparkle.co.uk"}, headers=owner
    )
    assert invited.status_code == 201
    cleaner_id = invited.json()["cleaner"]["cleaner_id"]
    assert email_sender.sent[0]["to"] == "cleaner@sparkle.co.uk"

    when = (utc_now() + timedelta(days=3)).isoformat()
    assigned = await client.post(
        "/jobs",
        json={"client_id": client_id, "scheduled_date": when, "cleaner_id": cleaner_id},
        headers=owner,
    )
    other = await client.post(
        "/jobs", json={"client_id": client_id, "scheduled_date": when}, headers=owner
    )
    assert assigned.status_code == 201 and other.status_code == 201

    cleaner = identity.auth("cleaner@sparkle.co.uk")
    jobs = (await client.get("/jobs", headers=cleaner)).json()
    assert [j["id"] for j in jobs] == [assigned.json()["job"]["id"]]

    hidden = await client.get(f"/jobs/{other.json()['job']['id']}", headers=cleaner)
    assert hidden.status_code == 404

    forbidden = await client.post(
        "/jobs", json={"client_id": client_id, "scheduled_date": when}, headers=cleaner
    )
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_unlinked_cleaner_gets_empty_lists(client: AsyncClient, identity):
    cleaner = identity.auth("lonely@sparkle.co.uk")
    await client.post("/auth/set-role", json={"role": "CLEANER"}, headers=cleaner)

    clients = await client.get("/clients", headers=cleaner)
    jobs = await client.get("/jobs", headers=cleaner)

    assert clients.status_code == 200 and clients.json() == []
    assert jobs.status_code == 200 and jobs.json() == []


@pytest.mark.asyncio
async def test_invited_cleaner_sets_password(client: AsyncClient, identity, email_sender):
    owner = identity.auth("owner@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=owner)
    await client.post(
        "/business/cleaners", json={"email": "cleaner@sparkle.co.uk"}, headers=owner
    )
    token = email_sender.sent[0]["text"].split("token=")[1].split()[0]

    accepted = await client.post(
        "/invitations/accept", json={"token": token, "password": "NewPass1234"}
    )
    reused = await client.post(
        "/invitations/accept", json={"token": token, "password": "NewPass1234"}
    )

    assert accepted.status_code == 200
    assert await identity.verify_password("cleaner@sparkle.co.uk", "NewPass1234")
    assert reused.status_code == 400
    assert reused.json()["error"]["code"] == "INVALID_INVITATION"
