from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN
from src.domain.actor import Actor
from src.domain.entities import PhotoType
from src.domain.permissions import Action, can
from src.domain.whatsapp import build_link, job_completion_message, job_photos_message

from .dtos import WhatsAppLinkResponse
from .views import load_visible_job


class JobWhatsAppLinkUseCase:
    """
    wa.me share links for a job: photo updates and completion summaries.

    A client without a phone number yields a response carrying an error
    instead of a link.
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def photos_link(
        self, actor: Actor, job_id: UUID, photo_type: Optional[PhotoType] = None
    ) -> Result[WhatsAppLinkResponse]:
        return await self._link(actor, job_id, photo_type, completion=False)

    async def completion_link(self, actor: Actor, job_id: UUID) -> Result[WhatsAppLinkResponse]:
        return await self._link(actor, job_id, None, completion=True)

    async def _link(
        self, actor: Actor, job_id: UUID, photo_type: Optional[PhotoType], completion: bool
    ) -> Result[WhatsAppLinkResponse]:
        if not can(actor.role, Action.JOB_SHARE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded
            job = loaded.value

            client = await self.uow.clients.get(job.business_id, job.client_id)
            if client is None:
                return Return.err(CLIENT_NOT_FOUND)
            if not client.phone:
                return Return.ok(WhatsAppLinkResponse.missing_phone())

            business = await self.uow.businesses.get_by_id(job.business_id)
            photos = await self.uow.jobs.list_photos([job.id])
            if completion:
                checklist = await self.uow.jobs.list_checklist([job.id])
                message = job_completion_message(job, business, client, checklist, photos)
            else:
                message = job_photos_message(job, business, client, photos, photo_type)

            return Return.ok(
                WhatsAppLinkResponse(
                    whatsapp_url=build_link(client.phone, message),
                    phone=client.phone,
                    message=message,
                )
            )
