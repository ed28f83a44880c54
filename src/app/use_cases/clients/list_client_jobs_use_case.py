from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN
from src.app.use_cases.jobs.dtos import JobResponse
from src.app.use_cases.jobs.views import build_job_views
from src.domain.actor import Actor
from src.domain.permissions import Action, can


class ListClientJobsUseCase:
    """
    Job history of a client.

    Cleaners only see the jobs assigned to them.
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, client_id: UUID) -> Result[List[JobResponse]]:
        if not can(actor.role, Action.CLIENT_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            if await self.uow.clients.get(business_id, client_id) is None:
                return Return.err(CLIENT_NOT_FOUND)

            cleaner_id = None if can(actor.role, Action.JOB_VIEW_ALL) else actor.id
            jobs = await self.uow.jobs.list(business_id, cleaner_id=cleaner_id, client_id=client_id)
            views = await build_job_views(
                self.uow, business_id, jobs, include_invoices=can(actor.role, Action.INVOICE_VIEW)
            )
            return Return.ok(views)
