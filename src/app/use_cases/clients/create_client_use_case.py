import logging
from typing import Any, Dict, Optional

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.entities import Client
from src.domain.permissions import Action, can

from .dtos import ClientResponse

logger = logging.getLogger(__name__)


class CreateClientUseCase:
    """
    Use case for adding a client.

    Business Rules:
    - Only owners/admins manage clients
    - The client is always created in the caller's own business
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self,
        actor: Actor,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[Dict[str, Any]] = None,
    ) -> Result[ClientResponse]:
        if not can(actor.role, Action.CLIENT_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            client = await self.uow.clients.create(
                Client(
                    business_id=tenant.value,
                    name=name,
                    email=email,
                    phone=phone,
                    address=address,
                    notes=notes,
                )
            )
            response = ClientResponse.from_entity(client)
            await self.uow.commit()

            logger.info(f"Client {client.id} created for business {tenant.value}")
            return Return.ok(response)
