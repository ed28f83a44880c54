from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscriptions import (
    CancelSubscriptionUseCase,
    GetSubscriptionUseCase,
    GetUsageStatsUseCase,
    SubscriptionResponse,
    UpdateSubscriptionUseCase,
    UsageStatsResponse,
)
from src.depends import get_current_user, get_tenant_resolver, get_unit_of_work
from src.domain.actor import Actor
from src.domain.entities import PlanType

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


class UpdateSubscriptionRequest(BaseModel):
    plan_type: PlanType
    stripe_subscription_id: Optional[str] = Field(None, max_length=255)


@router.get("", response_model=SubscriptionResponse)
async def get_subscription(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    The business subscription; a FREE one is created on first access

    Raises:
        - 403 Forbidden: Caller cannot manage the subscription
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await GetSubscriptionUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("", response_model=SubscriptionResponse)
async def update_subscription(
    request: UpdateSubscriptionRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Change plan and restart the billing period

    Raises:
        - 403 Forbidden: Caller cannot manage the subscription
    """
    result = await UpdateSubscriptionUseCase(uow, tenants).execute(
        actor, request.plan_type, request.stripe_subscription_id
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/usage", response_model=UsageStatsResponse)
async def get_usage(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """Jobs created per month against the plan's monthly limit"""
    result = await GetUsageStatsUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/cancel", response_model=SubscriptionResponse)
async def cancel_subscription(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: Caller cannot manage the subscription
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await CancelSubscriptionUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
