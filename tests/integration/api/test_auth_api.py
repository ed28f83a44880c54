import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_signup_creates_owner(client: AsyncClient, identity):
    """
    Given a new email
    When I sign up
    Then a local OWNER user keyed by the identity provider id exists
    """
    response = await client.post(
        "/auth/signup", json={"email": "owner@sparkle.co.uk", "password": "SecurePass123"}
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["role"] == "OWNER"
    assert user["id"] == str(identity.accounts["owner@sparkle.co.uk"]["id"])


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient):
    payload = {"email": "owner@sparkle.co.uk", "password": "SecurePass123"}
    await client.post("/auth/signup", json=payload)

    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_signup_short_password(client: AsyncClient):
    response = await client.post(
        "/auth/signup", json={"email": "owner@sparkle.co.uk", "password": "short"}
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert "password" in response.json()["error"]["details"]


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/auth/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_rejects_unknown_token(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_first_request_provisions_owner(client: AsyncClient, identity):
    response = await client.get("/auth/me", headers=identity.auth("new@sparkle.co.uk"))

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "new@sparkle.co.uk"
    assert data["role"] == "OWNER"
    assert data["business_id"] is None


@pytest.mark.asyncio
async def test_role_locked_after_business_created(client: AsyncClient, identity):
    """
    Given an owner who already created a business
    When they try to become a cleaner
    Then the request fails with ROLE_LOCKED
    """
    headers = identity.auth("owner@sparkle.co.uk")
    await client.post("/business", json={"name": "Sparkle"}, headers=headers)

    response = await client.post("/auth/set-role", json={"role": "CLEANER"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "ROLE_LOCKED"


@pytest.mark.asyncio
async def test_role_can_change_before_business(client: AsyncClient, identity):
    headers = identity.auth("cleaner@sparkle.co.uk")

    response = await client.post("/auth/set-role", json={"role": "CLEANER"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["role"] == "CLEANER"
