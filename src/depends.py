from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.imagekit_storage import ImageKitStorage
from src.adapter.services.reportlab_invoice_renderer import ReportLabInvoiceRenderer
from src.adapter.services.resend_email_sender import ResendEmailSender
from src.adapter.services.scheduler import PeriodicSweep, SweepScheduler
from src.adapter.services.stripe_payment_gateway import StripePaymentGateway
from src.adapter.services.supabase_identity_provider import SupabaseIdentityProvider
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, to_http_error
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.image_storage import IImageStorage
from src.app.services.invoice_renderer import IInvoiceRenderer
from src.app.services.payment_gateway import IPaymentGateway
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateUseCase
from src.app.use_cases.sweeps import (
    RenewRecurringJobsUseCase,
    SendJobRemindersUseCase,
    SendPaymentRemindersUseCase,
)
from src.domain.actor import Actor
from src.domain.entities import PlanType

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_tenant_resolver(uow: UnitOfWork = Depends(get_unit_of_work)) -> TenantResolver:
    """One resolver per request, sharing the request's unit of work"""
    return TenantResolver(uow)


@lru_cache
def get_identity_provider() -> IIdentityProvider:
    return SupabaseIdentityProvider(
        base_url=ApplicationConfig.SUPABASE_URL,
        anon_key=ApplicationConfig.SUPABASE_ANON_KEY,
        service_role_key=ApplicationConfig.SUPABASE_SERVICE_ROLE_KEY,
        jwt_secret=ApplicationConfig.SUPABASE_JWT_SECRET,
        timeout=ApplicationConfig.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_email_sender() -> IEmailSender:
    return ResendEmailSender(
        api_key=ApplicationConfig.EMAIL_API_KEY,
        sender=ApplicationConfig.EMAIL_FROM,
        timeout=ApplicationConfig.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_payment_gateway() -> IPaymentGateway:
    return StripePaymentGateway(
        secret_key=ApplicationConfig.STRIPE_SECRET_KEY,
        webhook_secret=ApplicationConfig.STRIPE_WEBHOOK_SECRET,
        timeout=ApplicationConfig.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_image_storage() -> IImageStorage:
    return ImageKitStorage(
        private_key=ApplicationConfig.IMAGEKIT_PRIVATE_KEY,
        upload_url=ApplicationConfig.IMAGEKIT_UPLOAD_URL,
        timeout=ApplicationConfig.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_invoice_renderer() -> IInvoiceRenderer:
    return ReportLabInvoiceRenderer()


def get_price_ids():
    return {
        PlanType.SOLO: ApplicationConfig.STRIPE_PRICE_ID_SOLO,
        PlanType.SMALL_TEAM: ApplicationConfig.STRIPE_PRICE_ID_SMALL_TEAM,
    }


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IIdentityProvider = Depends(get_identity_provider),
) -> Actor:
    """
    Dependency resolving the bearer token to the calling user.

    Returns:
        Actor with the local user id, email and role

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
        ServerError: 502 if the identity provider is unreachable
    """
    if credentials is None:
        raise ClientError(Error("UNAUTHORIZED", "Missing bearer token"), status_code=401)

    result = await AuthenticateUseCase(uow, identity).execute(credentials.credentials)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


def build_scheduler() -> SweepScheduler:
    """Background sweeps, each with its own session per run"""

    async def job_reminders():
        async with AsyncSessionLocal() as session:
            await SendJobRemindersUseCase(
                SqlAlchemyUnitOfWork(session), get_email_sender()
            ).execute()

    async def recurring_renewal():
        async with AsyncSessionLocal() as session:
            await RenewRecurringJobsUseCase(SqlAlchemyUnitOfWork(session)).execute()

    async def payment_reminders():
        async with AsyncSessionLocal() as session:
            await SendPaymentRemindersUseCase(
                SqlAlchemyUnitOfWork(session), get_email_sender()
            ).execute()

    return SweepScheduler(
        [
            PeriodicSweep(
                "job-reminders",
                job_reminders,
                interval_seconds=ApplicationConfig.JOB_REMINDER_INTERVAL_SECONDS,
            ),
            PeriodicSweep(
                "recurring-renewal",
                recurring_renewal,
                daily_hour=ApplicationConfig.RECURRING_RENEWAL_HOUR,
            ),
            PeriodicSweep(
                "payment-reminders",
                payment_reminders,
                daily_hour=ApplicationConfig.PAYMENT_REMINDER_HOUR,
            ),
        ]
    )
