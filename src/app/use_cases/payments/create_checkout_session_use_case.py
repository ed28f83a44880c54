import logging
from typing import Dict

from libs.result import Error, Result, Return
from src.app.services.errors import ProviderError
from src.app.services.payment_gateway import IPaymentGateway
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, dependency_error, validation_error
from src.domain.actor import Actor
from src.domain.entities import PlanType
from src.domain.permissions import Action, can

from .dtos import CheckoutSessionResponse

logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    """
    Start a hosted checkout for a paid plan.

    Business Rules:
    - Only SOLO and SMALL_TEAM can be bought
    - Session metadata carries business_id, user_id and plan_type so the
      webhook can apply the plan
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tenants: TenantResolver,
        gateway: IPaymentGateway,
        price_ids: Dict[PlanType, str],
        frontend_url: str,
    ):
        self.uow = uow
        self.tenants = tenants
        self.gateway = gateway
        self.price_ids = price_ids
        self.frontend_url = frontend_url.rstrip("/")

    async def execute(self, actor: Actor, plan_type: PlanType) -> Result[CheckoutSessionResponse]:
        if not can(actor.role, Action.SUBSCRIPTION_MANAGE):
            return Return.err(FORBIDDEN)

        plan_type = PlanType(plan_type)
        if plan_type == PlanType.FREE:
            return Return.err(
                validation_error({"plan_type": ["Only paid plans can be purchased"]})
            )

        price_id = self.price_ids.get(plan_type)
        if not price_id:
            logger.error(f"No price configured for plan {plan_type.value}")
            return Return.err(Error("PAYMENT_PROVIDER_ERROR", "Payments are not configured"))

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant

        try:
            session = await self.gateway.create_checkout_session(
                price_id=price_id,
                customer_email=actor.email,
                success_url=f"{self.frontend_url}/settings/subscription?success=true",
                cancel_url=f"{self.frontend_url}/settings/subscription?canceled=true",
                metadata={
                    "business_id": str(tenant.value),
                    "user_id": str(actor.id),
                    "plan_type": plan_type.value,
                },
            )
        except ProviderError as exc:
            logger.error(f"Checkout session for business {tenant.value} failed: {exc}")
            return Return.err(dependency_error(exc))

        return Return.ok(CheckoutSessionResponse(session_id=session.id, url=session.url))
