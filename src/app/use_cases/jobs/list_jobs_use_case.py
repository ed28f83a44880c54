from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.base import as_utc, utc_now
from src.domain.entities import JobStatus
from src.domain.permissions import Action, can

from .dtos import JobResponse
from .views import build_job_views


class ListJobsUseCase:
    """
    Use case for listing jobs.

    Business Rules:
    - Owners/admins see every job of their business
    - Cleaners see only jobs assigned to them
    - A caller with no resolvable business gets an empty list
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self,
        actor: Actor,
        client_id: Optional[UUID] = None,
        status: Optional[JobStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Result[List[JobResponse]]:
        if not can(actor.role, Action.JOB_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            business_id = await self.tenants.resolve_or_none(actor.id, actor.role)
            if business_id is None:
                return Return.ok([])

            cleaner_id = None if can(actor.role, Action.JOB_VIEW_ALL) else actor.id
            jobs = await self.uow.jobs.list(
                business_id,
                cleaner_id=cleaner_id,
                client_id=client_id,
                start=as_utc(start),
                end=as_utc(end),
                status=status,
            )
            views = await build_job_views(
                self.uow, business_id, jobs, include_invoices=can(actor.role, Action.INVOICE_VIEW)
            )
            return Return.ok(views)


class ListTodayJobsUseCase(ListJobsUseCase):
    """Jobs scheduled for the current UTC day"""

    async def execute(self, actor: Actor) -> Result[List[JobResponse]]:
        day_start = utc_now().replace(hour=0, minute=0, second=0, microsecond=0)
        return await super().execute(actor, start=day_start, end=day_start + timedelta(days=1))
