from typing import List

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can

from .dtos import ClientResponse


class ListClientsUseCase:
    """
    Clients of the caller's business.

    A cleaner without an ACTIVE roster link gets an empty list rather than an error.
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor) -> Result[List[ClientResponse]]:
        if not can(actor.role, Action.CLIENT_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            business_id = await self.tenants.resolve_or_none(actor.id, actor.role)
            if business_id is None:
                return Return.ok([])

            clients = await self.uow.clients.list(business_id)
            return Return.ok([ClientResponse.from_entity(c) for c in clients])
