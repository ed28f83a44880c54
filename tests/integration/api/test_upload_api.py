import pytest
from httpx import AsyncClient

from src.app.use_cases.upload import MAX_FILE_SIZE


@pytest.mark.asyncio
async def test_owner_uploads_job_photo(client: AsyncClient, identity):
    owner = identity.auth("owner@sparkle.co.uk")

    response = await client.post(
        "/upload/image",
        files={"file": ("kitchen.png", b"\x89PNG\r\n\x1a\n" + b"0" * 64, "image/png")},
        data={"folder": "jobs"},
        headers=owner,
    )

    assert response.status_code == 200
    assert response.json()["url"].startswith("https://img.test/")


@pytest.mark.asyncio
async def test_oversized_upload_is_rejected(client: AsyncClient, identity):
    owner = identity.auth("owner@sparkle.co.uk")

    response = await client.post(
        "/upload/image",
        files={"file": ("huge.png", b"0" * (MAX_FILE_SIZE + 4096), "image/png")},
        headers=owner,
    )

    assert response.status_code == 422
    assert response.json()["error"]["details"]["file"] == ["File must be 10MB or smaller"]
