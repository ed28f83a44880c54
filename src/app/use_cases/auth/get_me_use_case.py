from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import Actor

from .dtos import MeResponse


class GetMeUseCase:
    """Profile of the authenticated user, with their business when they have one"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(actor.id)
            business_id = await self.tenants.resolve_or_none(actor.id, actor.role)

            return Return.ok(
                MeResponse(
                    id=str(actor.id),
                    email=actor.email,
                    role=actor.role.value,
                    business_id=str(business_id) if business_id else None,
                    created_at=user.created_at if user else None,
                )
            )
