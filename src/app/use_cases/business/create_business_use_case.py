"""
Create Business Use Case

Creates the caller's tenant together with its FREE subscription and invoice
number sequence.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN
from src.app.use_cases.subscriptions.usage import get_or_create_subscription
from src.domain.actor import Actor
from src.domain.entities import Business
from src.domain.permissions import Action, can

from .dtos import BusinessResponse


class CreateBusinessUseCase:
    """
    Use case for creating a business.

    Business Rules:
    - Only owners (and admins) can create a business
    - One business per owner
    - A FREE/ACTIVE subscription is created alongside
    - The invoice counter starts at 0 so the first invoice is INV-000001
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: Actor,
        name: str,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        vat_enabled: bool = False,
        vat_number: Optional[str] = None,
        invoice_template: Optional[str] = None,
    ) -> Result[BusinessResponse]:
        if not can(actor.role, Action.BUSINESS_MANAGE):
            return Return.err(FORBIDDEN)

        async with self.uow:
            existing = await self.uow.businesses.get_by_owner(actor.id)
            if existing is not None:
                return Return.err(
                    Error("BUSINESS_ALREADY_EXISTS", "Business already exists for this user")
                )

            business = await self.uow.businesses.create(
                Business(
                    user_id=actor.id,
                    name=name,
                    phone=phone,
                    address=address,
                    vat_enabled=vat_enabled,
                    vat_number=vat_number if vat_enabled else None,
                    invoice_template=invoice_template or "classic",
                )
            )

            await get_or_create_subscription(self.uow, business.id)
            await self.uow.invoices.init_sequence(business.id)

            await self.uow.commit()

            return Return.ok(BusinessResponse.from_entity(business))
