from libs.result import Result, Return
from src.app.services.tenant_resolver import BUSINESS_NOT_FOUND
from src.app.services.unit_of_work import UnitOfWork
from src.domain.actor import Actor

from .dtos import BusinessSummary, CleanerBusinessResponse


class GetCleanerBusinessUseCase:
    """The business of the caller's first ACTIVE roster link"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor) -> Result[CleanerBusinessResponse]:
        async with self.uow:
            link = await self.uow.cleaners.get_first_active(actor.id)
            if link is None:
                return Return.err(BUSINESS_NOT_FOUND)

            business = await self.uow.businesses.get_by_id(link.business_id)
            if business is None:
                return Return.err(BUSINESS_NOT_FOUND)

            return Return.ok(
                CleanerBusinessResponse(
                    business=BusinessSummary.from_entity(business),
                    status=link.status.value,
                    activated_at=link.activated_at,
                )
            )
