from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can

from .dtos import ClientResponse


class GetClientUseCase:
    """Single client; clients of other businesses are reported as not found"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, client_id: UUID) -> Result[ClientResponse]:
        if not can(actor.role, Action.CLIENT_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            client = await self.uow.clients.get(tenant.value, client_id)
            if client is None:
                return Return.err(CLIENT_NOT_FOUND)

            return Return.ok(ClientResponse.from_entity(client))
