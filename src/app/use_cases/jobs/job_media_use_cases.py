"""
Photos and checklist of a job.
"""

import io
import logging
import os
import zipfile
from typing import Optional
from urllib.parse import urlparse
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.errors import ProviderError
from src.app.services.image_storage import IImageStorage
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, dependency_error
from src.domain.actor import Actor
from src.domain.entities import JobPhoto, PhotoType
from src.domain.permissions import Action, can

from .dtos import ChecklistItemResponse, PhotoArchive, PhotoResponse
from .views import load_visible_job

logger = logging.getLogger(__name__)


class AddJobPhotoUseCase:
    """Attach an already uploaded image to a job as a BEFORE or AFTER photo"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self, actor: Actor, job_id: UUID, image_url: str, photo_type: PhotoType
    ) -> Result[PhotoResponse]:
        if not can(actor.role, Action.JOB_UPLOAD_PHOTO):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded

            photo = await self.uow.jobs.add_photo(
                JobPhoto(job_id=job_id, image_url=image_url, photo_type=photo_type)
            )
            response = PhotoResponse.from_entity(photo)
            await self.uow.commit()

            return Return.ok(response)


class UpdateChecklistItemUseCase:
    """Tick or untick a checklist item of a job"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self, actor: Actor, job_id: UUID, item_id: UUID, completed: bool
    ) -> Result[ChecklistItemResponse]:
        if not can(actor.role, Action.JOB_UPDATE_CHECKLIST):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded

            item = await self.uow.jobs.get_checklist_item(job_id, item_id)
            if item is None:
                return Return.err(Error("CHECKLIST_ITEM_NOT_FOUND", "Checklist item not found"))

            item.completed = completed
            item = await self.uow.jobs.update_checklist_item(item)
            response = ChecklistItemResponse.from_entity(item)
            await self.uow.commit()

            return Return.ok(response)


class DownloadJobPhotosUseCase:
    """
    Zip archive of a job's photos.

    Business Rules:
    - Optional photo_type narrows the archive to BEFORE or AFTER photos
    - A job without matching photos is PHOTOS_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver, storage: IImageStorage):
        self.uow = uow
        self.tenants = tenants
        self.storage = storage

    async def execute(
        self, actor: Actor, job_id: UUID, photo_type: Optional[PhotoType] = None
    ) -> Result[PhotoArchive]:
        if not can(actor.role, Action.JOB_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded
            job = loaded.value

            photos = [
                p
                for p in await self.uow.jobs.list_photos([job.id])
                if photo_type is None or p.photo_type == photo_type
            ]

        if not photos:
            return Return.err(Error("PHOTOS_NOT_FOUND", "No photos found for this job"))

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
                for index, photo in enumerate(photos, 1):
                    content = await self.storage.download(photo.image_url)
                    archive.writestr(_archive_name(index, photo), content)
        except ProviderError as exc:
            logger.error(f"Downloading photos of job {job_id} failed: {exc}")
            return Return.err(dependency_error(exc))

        suffix = f"-{photo_type.value.lower()}" if photo_type else ""
        return Return.ok(
            PhotoArchive(file_name=f"job-{job.id}{suffix}-photos.zip", content=buffer.getvalue())
        )


def _archive_name(index: int, photo: JobPhoto) -> str:
    extension = os.path.splitext(urlparse(photo.image_url).path)[1] or ".jpg"
    return f"{index:02d}-{photo.photo_type.value.lower()}{extension}"
