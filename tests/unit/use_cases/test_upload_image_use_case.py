from unittest.mock import AsyncMock

import pytest

from src.app.services.errors import ProviderError
from src.app.services.image_storage import StoredImage
from src.app.use_cases.upload.upload_image_use_case import (
    MAX_FILE_SIZE,
    UploadImageUseCase,
    storage_file_name,
)


@pytest.fixture
def storage():
    storage = AsyncMock()
    storage.upload.return_value = StoredImage(
        url="https://img.example.com/job-photos/1-a.png", file_id="f1", name="1-a.png"
    )
    return storage


def test_storage_name_replaces_unsafe_characters():
    assert storage_file_name("job-photos", "my kitchen (1).png", now_ms=1700000000000) == (
        "job-photos/1700000000000-my_kitchen__1_.png"
    )


@pytest.mark.asyncio
async def test_upload_stores_in_default_folder(storage, cleaner):
    result = await UploadImageUseCase(storage).execute(cleaner, b"\x89PNG", "a.png", "image/png")

    assert result.is_ok()
    assert result.value.file_id == "f1"
    content, name, folder = storage.upload.call_args.args
    assert content == b"\x89PNG"
    assert folder == "job-photos"
    assert name.startswith("job-photos/") and name.endswith("-a.png")


@pytest.mark.asyncio
async def test_oversized_file_is_rejected(storage, owner):
    result = await UploadImageUseCase(storage).execute(
        owner, b"x" * (MAX_FILE_SIZE + 1), "big.jpg", "image/jpeg"
    )

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details == {"file": ["File must be 10MB or smaller"]}
    storage.upload.assert_not_called()


@pytest.mark.asyncio
async def test_non_image_is_rejected(storage, owner):
    result = await UploadImageUseCase(storage).execute(
        owner, b"%PDF", "invoice.pdf", "application/pdf"
    )

    assert result.error.details == {"file": ["Only JPEG, PNG, WebP and GIF images are allowed"]}


@pytest.mark.asyncio
async def test_storage_failure_is_reported(storage, owner):
    storage.upload.side_effect = ProviderError("storage", "timeout")

    result = await UploadImageUseCase(storage).execute(owner, b"GIF89a", "a.gif", "image/gif")

    assert result.error.code == "STORAGE_ERROR"
