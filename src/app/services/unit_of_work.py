from abc import ABC, abstractmethod

from src.app.repositories.business_cleaner_repository import IBusinessCleanerRepository
from src.app.repositories.business_repository import IBusinessRepository
from src.app.repositories.cleaner_invitation_repository import ICleanerInvitationRepository
from src.app.repositories.client_repository import IClientRepository
from src.app.repositories.invoice_repository import IInvoiceRepository
from src.app.repositories.job_repository import IJobRepository
from src.app.repositories.subscription_repository import ISubscriptionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    businesses: IBusinessRepository
    cleaners: IBusinessCleanerRepository
    invitations: ICleanerInvitationRepository
    clients: IClientRepository
    jobs: IJobRepository
    invoices: IInvoiceRepository
    subscriptions: ISubscriptionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
