"""
Roster status changes: deactivate, activate and remove.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.entities import CleanerStatus
from src.domain.permissions import Action, can

from .dtos import CleanerResponse, RemoveCleanerResponse

logger = logging.getLogger(__name__)

CLEANER_NOT_FOUND = Error("CLEANER_NOT_FOUND", "Cleaner not found")


class _RosterUseCase:
    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def _load(self, actor: Actor, cleaner_id: UUID):
        tenant = await self.tenants.resolve(actor.id, actor.role)
        if tenant.is_err():
            return tenant
        link = await self.uow.cleaners.get_link(tenant.value, cleaner_id)
        if link is None:
            return Return.err(CLEANER_NOT_FOUND)
        return Return.ok(link)


class DeactivateCleanerUseCase(_RosterUseCase):
    """Flip a roster link to INACTIVE; history is kept"""

    async def execute(self, actor: Actor, cleaner_id: UUID) -> Result[CleanerResponse]:
        if not can(actor.role, Action.CLEANER_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await self._load(actor, cleaner_id)
            if loaded.is_err():
                return loaded
            link = loaded.value

            link.status = CleanerStatus.INACTIVE
            link = await self.uow.cleaners.update(link)
            cleaner = await self.uow.users.get_by_id(cleaner_id)
            await self.uow.commit()

            logger.info(f"Cleaner {cleaner_id} deactivated for business {link.business_id}")
            return Return.ok(CleanerResponse.from_link(link, cleaner))


class ActivateCleanerUseCase(_RosterUseCase):
    """
    Flip a roster link back to ACTIVE.

    Business Rules:
    - A cleaner may only be ACTIVE at one business at a time
    """

    async def execute(self, actor: Actor, cleaner_id: UUID) -> Result[CleanerResponse]:
        if not can(actor.role, Action.CLEANER_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await self._load(actor, cleaner_id)
            if loaded.is_err():
                return loaded
            link = loaded.value

            if link.status != CleanerStatus.ACTIVE:
                active = await self.uow.cleaners.get_first_active(cleaner_id)
                if active is not None and active.business_id != link.business_id:
                    return Return.err(
                        Error(
                            "CLEANER_ACTIVE_ELSEWHERE",
                            "Cleaner is currently active for another business",
                        )
                    )
                link.status = CleanerStatus.ACTIVE
                link.activated_at = utc_now()
                link = await self.uow.cleaners.update(link)

            cleaner = await self.uow.users.get_by_id(cleaner_id)
            await self.uow.commit()

            return Return.ok(CleanerResponse.from_link(link, cleaner))


class RemoveCleanerUseCase(_RosterUseCase):
    """Delete the roster link; the user account and their jobs remain"""

    async def execute(self, actor: Actor, cleaner_id: UUID) -> Result[RemoveCleanerResponse]:
        if not can(actor.role, Action.CLEANER_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            loaded = await self._load(actor, cleaner_id)
            if loaded.is_err():
                return loaded

            await self.uow.cleaners.delete(loaded.value)
            await self.uow.commit()

            logger.info(f"Cleaner {cleaner_id} removed from business {loaded.value.business_id}")
            return Return.ok(RemoveCleanerResponse(status="removed"))
