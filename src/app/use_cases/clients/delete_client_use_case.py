import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can
from src.domain.scheduling import can_delete

from .dtos import DeleteClientResponse

logger = logging.getLogger(__name__)


class DeleteClientUseCase:
    """
    Use case for deleting a client.

    Business Rules:
    - A client with invoices cannot be deleted (Conflict)
    - A client with started or completed jobs cannot be deleted (Conflict)
    - Otherwise the client's SCHEDULED jobs are deleted with it
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, client_id: UUID) -> Result[DeleteClientResponse]:
        if not can(actor.role, Action.CLIENT_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            client = await self.uow.clients.get(business_id, client_id)
            if client is None:
                return Return.err(CLIENT_NOT_FOUND)

            if await self.uow.invoices.list(business_id, client_id=client.id):
                return Return.err(
                    Error("CLIENT_HAS_INVOICES", "Client has invoices and cannot be deleted")
                )

            jobs = await self.uow.jobs.list(business_id, client_id=client.id)
            if any(not can_delete(job.status) for job in jobs):
                return Return.err(
                    Error(
                        "CLIENT_HAS_ACTIVE_JOBS",
                        "Client has started or completed jobs and cannot be deleted",
                    )
                )

            for job in jobs:
                await self.uow.jobs.delete(job)
            await self.uow.clients.delete(client)
            await self.uow.commit()

            logger.info(f"Client {client_id} deleted with {len(jobs)} jobs")
            return Return.ok(DeleteClientResponse(status="deleted", deleted_jobs=len(jobs)))
