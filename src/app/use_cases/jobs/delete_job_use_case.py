import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can
from src.domain.scheduling import can_delete

from .dtos import DeleteJobResponse
from .views import load_visible_job

logger = logging.getLogger(__name__)


class DeleteJobUseCase:
    """
    Use case for deleting a job.

    Business Rules:
    - Only SCHEDULED jobs can be deleted; others stay untouched
    - Checklist items and photos go with the job
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, job_id: UUID) -> Result[DeleteJobResponse]:
        if not can(actor.role, Action.JOB_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded
            job = loaded.value

            if not can_delete(job.status):
                return Return.err(
                    Error("JOB_NOT_DELETABLE", "Only scheduled jobs can be deleted")
                )

            await self.uow.jobs.delete(job)
            await self.uow.commit()

            logger.info(f"Job {job_id} deleted")
            return Return.ok(DeleteJobResponse(status="deleted"))
