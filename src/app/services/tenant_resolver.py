"""
Business-ID resolver.

Every tenant-scoped use case calls this before touching clients, jobs or
invoices. Owners and admins resolve to the business they own; cleaners resolve
to the business of their first ACTIVE roster link.
"""

from typing import Dict, Optional, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole

BUSINESS_NOT_FOUND = Error("BUSINESS_NOT_FOUND", "Business not found")


class TenantResolver:
    """
    Resolves the tenant (business id) of a user.

    Lookups are memoised in a plain dict that lives as long as the resolver,
    which is created once per request.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self._cache: Dict[Tuple[UUID, UserRole], Optional[UUID]] = {}

    async def resolve(self, user_id: UUID, role: UserRole) -> Result[UUID]:
        """Business id, or BUSINESS_NOT_FOUND"""
        business_id = await self.resolve_or_none(user_id, role)
        if business_id is None:
            return Return.err(BUSINESS_NOT_FOUND)
        return Return.ok(business_id)

    async def resolve_or_none(self, user_id: UUID, role: UserRole) -> Optional[UUID]:
        """Business id, or None for callers that degrade to empty results"""
        key = (user_id, UserRole(role))
        if key not in self._cache:
            self._cache[key] = await self._lookup(user_id, UserRole(role))
        return self._cache[key]

    async def _lookup(self, user_id: UUID, role: UserRole) -> Optional[UUID]:
        if role == UserRole.CLEANER:
            link = await self.uow.cleaners.get_first_active(user_id)
            return link.business_id if link else None

        business = await self.uow.businesses.get_by_owner(user_id)
        return business.id if business else None
