from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.business_repository import IBusinessRepository
from src.domain.base import utc_now
from src.domain.entities import Business


class BusinessRepository(IBusinessRepository):
    """Business repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, business_id: UUID) -> Optional[Business]:
        """Get business by ID"""
        stmt = select(Business).where(Business.id == business_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_owner(self, user_id: UUID) -> Optional[Business]:
        """Get the business owned by a user"""
        stmt = select(Business).where(Business.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, business: Business) -> Business:
        """Create a new business"""
        self.session.add(business)
        await self.session.flush()
        await self.session.refresh(business)
        return business

    async def update(self, business: Business) -> Business:
        """Update existing business"""
        business.updated_at = utc_now()
        self.session.add(business)
        await self.session.flush()
        await self.session.refresh(business)
        return business

    async def list_page(self, offset: int, limit: int) -> List[Business]:
        stmt = (
            select(Business)
            .order_by(Business.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self, created_since: Optional[datetime] = None) -> int:
        stmt = select(func.count()).select_from(Business)
        if created_since is not None:
            stmt = stmt.where(Business.created_at >= created_since)
        result = await self.session.exec(stmt)
        return result.one()

    async def list_by_owners(self, user_ids: Sequence[UUID]) -> List[Business]:
        if not user_ids:
            return []
        stmt = select(Business).where(Business.user_id.in_(list(user_ids)))
        result = await self.session.exec(stmt)
        return list(result.all())
