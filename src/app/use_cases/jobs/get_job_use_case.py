from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can

from .dtos import JobResponse
from .views import build_job_views, load_visible_job


class GetJobUseCase:
    """Single job; the invoice is attached only for roles that may see invoices"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, job_id: UUID) -> Result[JobResponse]:
        if not can(actor.role, Action.JOB_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded
            job = loaded.value

            views = await build_job_views(
                self.uow,
                job.business_id,
                [job],
                include_invoices=can(actor.role, Action.INVOICE_VIEW),
            )
            return Return.ok(views[0])
