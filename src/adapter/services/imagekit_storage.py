import logging
from typing import Optional

import httpx

from src.app.services.errors import ProviderError
from src.app.services.image_storage import IImageStorage, StoredImage

logger = logging.getLogger(__name__)


class ImageKitStorage(IImageStorage):
    """ImageKit upload API, authenticated with the account's private key"""

    def __init__(
        self,
        private_key: str,
        upload_url: str,
        timeout: float = 10.0,
        read_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.private_key = private_key
        self.upload_url = upload_url
        self.timeout = timeout
        self.read_retries = read_retries
        self.transport = transport

    async def upload(self, content: bytes, file_name: str, folder: str) -> StoredImage:
        if not self.private_key:
            raise ProviderError("storage", "Image storage is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.upload_url,
                    auth=(self.private_key, ""),
                    data={"fileName": file_name, "folder": folder, "useUniqueFileName": "true"},
                    files={"file": (file_name, content)},
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(f"Image upload of {file_name} failed: {exc}")
            raise ProviderError("storage", str(exc)) from exc

        payload = response.json()
        return StoredImage(url=payload["url"], file_id=payload["fileId"], name=payload["name"])

    async def download(self, url: str) -> bytes:
        last_error: Optional[Exception] = None
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            for attempt in range(1, self.read_retries + 2):
                try:
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.content
                except httpx.HTTPError as exc:
                    last_error = exc
                    logger.warning(f"Download of {url} failed (attempt {attempt}): {exc}")
        raise ProviderError("storage", str(last_error))
