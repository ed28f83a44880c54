from datetime import timedelta
from typing import List

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.permissions import Action, can

from .dtos import CleanerResponse


class ListCleanersUseCase:
    """Roster of the caller's business with total and today's job counts"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor) -> Result[List[CleanerResponse]]:
        if not can(actor.role, Action.CLEANER_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            day_start = utc_now().replace(hour=0, minute=0, second=0, microsecond=0)
            entries = await self.uow.cleaners.list_with_job_counts(
                tenant.value, day_start, day_start + timedelta(days=1)
            )
            return Return.ok([CleanerResponse.from_entry(entry) for entry in entries])
