from typing import Dict

from fastapi import APIRouter, Depends, Header, Request
from pydantic import BaseModel

from config import ApplicationConfig
from src.api.error import to_http_error
from src.app.services.payment_gateway import IPaymentGateway
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.payments import (
    CheckoutSessionResponse,
    CreateCheckoutSessionUseCase,
    HandlePaymentWebhookUseCase,
    WebhookAck,
)
from src.depends import (
    get_current_user,
    get_payment_gateway,
    get_price_ids,
    get_tenant_resolver,
    get_unit_of_work,
)
from src.domain.actor import Actor
from src.domain.entities import PlanType

router = APIRouter(prefix="/payments", tags=["Payments"])


class CheckoutSessionRequest(BaseModel):
    """Paid plan to subscribe to"""

    plan_type: PlanType


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    request: CheckoutSessionRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    price_ids: Dict[PlanType, str] = Depends(get_price_ids),
):
    """
    Start a hosted checkout for a paid plan

    Raises:
        - 403 Forbidden: Caller cannot manage the subscription
        - 422 Unprocessable Entity: FREE plan requested
        - 502 Bad Gateway: Payment provider unavailable or plan not priced
    """
    use_case = CreateCheckoutSessionUseCase(
        uow, tenants, gateway, price_ids, ApplicationConfig.FRONTEND_URL
    )
    result = await use_case.execute(actor, request.plan_type)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/webhook", response_model=WebhookAck)
async def payment_webhook(
    request: Request,
    stripe_signature: str = Header("", alias="stripe-signature"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
):
    """
    Payment provider webhook (unauthenticated; verified by signature)

    The raw body is required for signature verification.

    Raises:
        - 400 Bad Request: INVALID_WEBHOOK_SIGNATURE
    """
    payload = await request.body()
    result = await HandlePaymentWebhookUseCase(uow, gateway).execute(payload, stripe_signature)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
