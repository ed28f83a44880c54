from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.cleaner_invitation_repository import ICleanerInvitationRepository
from src.domain.base import utc_now
from src.domain.entities import CleanerInvitation


class CleanerInvitationRepository(ICleanerInvitationRepository):
    """Cleaner invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token_hash(self, token_hash: str) -> Optional[CleanerInvitation]:
        """Get invitation by SHA-256 token hash"""
        stmt = select(CleanerInvitation).where(CleanerInvitation.token_hash == token_hash)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, invitation: CleanerInvitation) -> CleanerInvitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: CleanerInvitation) -> CleanerInvitation:
        """Update existing invitation"""
        invitation.updated_at = utc_now()
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation
