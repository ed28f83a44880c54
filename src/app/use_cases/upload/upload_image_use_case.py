"""
Upload Image Use Case
"""

import logging
import re
import time
from typing import Optional

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.errors import ProviderError
from src.app.services.image_storage import IImageStorage
from src.app.use_cases.common import FORBIDDEN, dependency_error, validation_error
from src.domain.actor import Actor
from src.domain.permissions import Action, can

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024
ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
DEFAULT_FOLDER = "job-photos"

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_UNSAFE_FOLDER_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


class UploadImageResponse(BaseModel):
    url: str
    file_id: str
    name: str


def storage_file_name(folder: str, original_name: str, now_ms: Optional[int] = None) -> str:
    """folder/<epoch ms>-<name with unsafe characters replaced by _>"""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{folder}/{stamp}-{_UNSAFE_NAME_CHARS.sub('_', original_name)}"


class UploadImageUseCase:
    """
    Use case for uploading an image to external storage.

    Business Rules:
    - At most 10MB
    - JPEG, PNG, WebP or GIF only
    - Stored under folder/<timestamp>-<sanitized name>
    """

    def __init__(self, storage: IImageStorage):
        self.storage = storage

    async def execute(
        self,
        actor: Actor,
        content: bytes,
        file_name: str,
        content_type: Optional[str],
        folder: Optional[str] = None,
    ) -> Result[UploadImageResponse]:
        if not can(actor.role, Action.JOB_UPLOAD_PHOTO):
            return Return.err(FORBIDDEN)

        problems = []
        if not content:
            problems.append("File is empty")
        elif len(content) > MAX_FILE_SIZE:
            problems.append("File must be 10MB or smaller")
        if content_type not in ALLOWED_CONTENT_TYPES:
            problems.append("Only JPEG, PNG, WebP and GIF images are allowed")
        if problems:
            return Return.err(validation_error({"file": problems}))

        folder = _UNSAFE_FOLDER_CHARS.sub("_", folder or DEFAULT_FOLDER)
        name = storage_file_name(folder, file_name or "image")

        try:
            stored = await self.storage.upload(content, name, folder)
        except ProviderError as exc:
            logger.error(f"Upload by {actor.id} failed: {exc}")
            return Return.err(dependency_error(exc))

        logger.info(f"Image {stored.file_id} uploaded by {actor.id}")
        return Return.ok(
            UploadImageResponse(url=stored.url, file_id=stored.file_id, name=stored.name)
        )
