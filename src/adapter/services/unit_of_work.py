from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.business_cleaner_repository import BusinessCleanerRepository
from src.adapter.repositories.business_repository import BusinessRepository
from src.adapter.repositories.cleaner_invitation_repository import CleanerInvitationRepository
from src.adapter.repositories.client_repository import ClientRepository
from src.adapter.repositories.invoice_repository import InvoiceRepository
from src.adapter.repositories.job_repository import JobRepository
from src.adapter.repositories.subscription_repository import SubscriptionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.businesses = BusinessRepository(self.session)
        self.cleaners = BusinessCleanerRepository(self.session)
        self.invitations = CleanerInvitationRepository(self.session)
        self.clients = ClientRepository(self.session)
        self.jobs = JobRepository(self.session)
        self.invoices = InvoiceRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
