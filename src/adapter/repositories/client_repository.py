from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.client_repository import IClientRepository
from src.domain.base import utc_now
from src.domain.entities import Client


class ClientRepository(IClientRepository):
    """Client repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, business_id: UUID, client_id: UUID) -> Optional[Client]:
        stmt = select(Client).where(Client.id == client_id, Client.business_id == business_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_many(self, business_id: UUID, client_ids: Sequence[UUID]) -> List[Client]:
        if not client_ids:
            return []
        stmt = select(Client).where(
            Client.business_id == business_id, Client.id.in_(list(client_ids))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list(self, business_id: UUID) -> List[Client]:
        stmt = (
            select(Client)
            .where(Client.business_id == business_id)
            .order_by(Client.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def update(self, client: Client) -> Client:
        client.updated_at = utc_now()
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: Client) -> None:
        await self.session.delete(client)
        await self.session.flush()

    async def count_by_business(self, business_id: UUID) -> int:
        stmt = select(func.count()).select_from(Client).where(Client.business_id == business_id)
        result = await self.session.exec(stmt)
        return result.one()
