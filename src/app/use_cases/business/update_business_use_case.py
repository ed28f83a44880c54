"""
Update Business Use Case

Partial update of the owner's business profile, including VAT settings.
"""

from typing import Any, Dict, Optional

from libs.result import Result, Return
from src.app.services.tenant_resolver import BUSINESS_NOT_FOUND, TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.domain.actor import Actor
from src.domain.permissions import Action, can

from .dtos import BusinessResponse

UPDATABLE_FIELDS = ("name", "phone", "address", "vat_enabled", "vat_number", "invoice_template")


class UpdateBusinessUseCase:
    """
    Use case for updating a business.

    Business Rules:
    - Only fields present in the request are changed
    - Disabling VAT clears the VAT number
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor, changes: Dict[str, Any]) -> Result[BusinessResponse]:
        if not can(actor.role, Action.BUSINESS_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

            business = await self.uow.businesses.get_by_id(tenant.value)
            if business is None:
                return Return.err(BUSINESS_NOT_FOUND)

            for field in UPDATABLE_FIELDS:
                if field in changes:
                    setattr(business, field, changes[field])
            if not business.vat_enabled:
                business.vat_number = None

            business = await self.uow.businesses.update(business)
            await self.uow.commit()

            return Return.ok(BusinessResponse.from_entity(business))


class ToggleVatUseCase:
    """Turn VAT on (optionally with a VAT number) or off"""

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.update_business = UpdateBusinessUseCase(uow, tenants)

    async def execute(
        self, actor: Actor, vat_enabled: bool, vat_number: Optional[str] = None
    ) -> Result[BusinessResponse]:
        changes: Dict[str, Any] = {"vat_enabled": vat_enabled}
        if vat_number is not None:
            changes["vat_number"] = vat_number
        return await self.update_business.execute(actor, changes)
