from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invoice_repository import IInvoiceRepository
from src.domain.base import utc_now
from src.domain.entities import Invoice, InvoiceCounter, InvoiceStatus


class InvoiceRepository(IInvoiceRepository):
    """Invoice repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, business_id: UUID, invoice_id: UUID) -> Optional[Invoice]:
        stmt = select(Invoice).where(
            Invoice.id == invoice_id, Invoice.business_id == business_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(
        self,
        business_id: UUID,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None,
        created_from: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
    ) -> List[Invoice]:
        stmt = select(Invoice).where(Invoice.business_id == business_id)
        if status is not None:
            stmt = stmt.where(Invoice.status == status)
        if client_id is not None:
            stmt = stmt.where(Invoice.client_id == client_id)
        if created_from is not None:
            stmt = stmt.where(Invoice.created_at >= created_from)
        if created_before is not None:
            stmt = stmt.where(Invoice.created_at < created_before)
        result = await self.session.exec(stmt.order_by(Invoice.created_at.desc()))
        return list(result.all())

    async def list_by_jobs(self, business_id: UUID, job_ids: List[UUID]) -> List[Invoice]:
        if not job_ids:
            return []
        stmt = select(Invoice).where(
            Invoice.business_id == business_id, Invoice.job_id.in_(job_ids)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def init_sequence(self, business_id: UUID) -> None:
        self.session.add(InvoiceCounter(business_id=business_id, last_value=0))
        await self.session.flush()

    async def next_sequence(self, business_id: UUID) -> int:
        """
        Increment-and-return in a single UPDATE ... RETURNING statement, so two
        concurrent writers can never observe the same value.

        Businesses created before the counter existed get one seeded from
        their current invoice count.
        """
        stmt = (
            update(InvoiceCounter)
            .where(InvoiceCounter.business_id == business_id)
            .values(last_value=InvoiceCounter.last_value + 1)
            .returning(InvoiceCounter.last_value)
        )
        result = await self.session.execute(stmt)
        value = result.scalar_one_or_none()
        if value is not None:
            return value

        existing = await self.session.exec(
            select(func.count()).select_from(Invoice).where(Invoice.business_id == business_id)
        )
        counter = InvoiceCounter(business_id=business_id, last_value=existing.one() + 1)
        self.session.add(counter)
        await self.session.flush()
        return counter.last_value

    async def count_by_business(self, business_id: UUID) -> int:
        stmt = select(func.count()).select_from(Invoice).where(Invoice.business_id == business_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_unpaid(self, business_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.business_id == business_id, Invoice.status == InvoiceStatus.UNPAID)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def sum_paid_between(self, business_id: UUID, start: datetime, end: datetime) -> float:
        stmt = select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(
            Invoice.business_id == business_id,
            Invoice.status == InvoiceStatus.PAID,
            Invoice.paid_at >= start,
            Invoice.paid_at < end,
        )
        result = await self.session.exec(stmt)
        return round(float(result.one()), 2)

    async def list_unpaid_due_between(self, start: datetime, end: datetime) -> List[Invoice]:
        stmt = (
            select(Invoice)
            .where(
                Invoice.status == InvoiceStatus.UNPAID,
                Invoice.due_date >= start,
                Invoice.due_date <= end,
            )
            .order_by(Invoice.due_date)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_all(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(Invoice))
        return result.one()

    async def sum_all_paid(self) -> float:
        stmt = select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(
            Invoice.status == InvoiceStatus.PAID
        )
        result = await self.session.exec(stmt)
        return round(float(result.one()), 2)
