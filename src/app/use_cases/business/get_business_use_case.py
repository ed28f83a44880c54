from libs.result import Result, Return
from src.app.services.tenant_resolver import BUSINESS_NOT_FOUND, TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can

from .dtos import BusinessResponse


class GetBusinessUseCase:
    """Business the caller belongs to (owned, or worked for as a cleaner)"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor) -> Result[BusinessResponse]:
        if not can(actor.role, Action.BUSINESS_VIEW):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            business = await self.uow.businesses.get_by_id(tenant.value)
            if business is None:
                return Return.err(BUSINESS_NOT_FOUND)

            return Return.ok(BusinessResponse.from_entity(business))
