"""
Handle Payment Webhook Use Case

Applies payment provider events to the local subscription.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.errors import InvalidWebhookSignatureError
from src.app.services.payment_gateway import IPaymentGateway
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscriptions.usage import get_or_create_subscription
from src.domain.base import utc_now
from src.domain.billing import SUBSCRIPTION_PERIOD
from src.domain.entities import PlanType, SubscriptionStatus

from .dtos import WebhookAck

logger = logging.getLogger(__name__)

ACTIVE_PROVIDER_STATUSES = ("active", "trialing")


class HandlePaymentWebhookUseCase:
    """
    Use case for payment provider webhooks.

    Business Rules:
    - The signature must verify, otherwise nothing is applied
    - checkout.session.completed: plan from metadata, provider id stored, ACTIVE
    - customer.subscription.updated: ACTIVE or CANCELLED, period end from the event
    - customer.subscription.deleted: CANCELLED
    - invoice.payment_failed: PAST_DUE
    - Any other event is acknowledged and ignored
    """

    def __init__(self, uow: UnitOfWork, gateway: IPaymentGateway):
        self.uow = uow
        self.gateway = gateway
        self._handlers = {
            "checkout.session.completed": self._checkout_completed,
            "customer.subscription.updated": self._subscription_updated,
            "customer.subscription.deleted": self._subscription_deleted,
            "invoice.payment_failed": self._payment_failed,
        }

    async def execute(self, payload: bytes, signature: str) -> Result[WebhookAck]:
        try:
            event = self.gateway.parse_webhook(payload, signature)
        except InvalidWebhookSignatureError:
            logger.warning("Rejected payment webhook with invalid signature")
            return Return.err(
                Error("INVALID_WEBHOOK_SIGNATURE", "Webhook signature verification failed")
            )

        event_type = event.get("type", "")
        data = (event.get("data") or {}).get("object") or {}
        handler = self._handlers.get(event_type)
        if handler is None:
            logger.info(f"Ignoring payment event {event_type}")
            return Return.ok(WebhookAck(received=True, event_type=event_type))

        async with self.uow:
            await handler(data)
            await self.uow.commit()

        return Return.ok(WebhookAck(received=True, event_type=event_type))

    async def _checkout_completed(self, session: Dict[str, Any]) -> None:
        metadata = session.get("metadata") or {}
        business_id = metadata.get("business_id")
        plan_type = metadata.get("plan_type")
        if not business_id or plan_type not in PlanType.__members__:
            logger.error("Checkout session completed without business metadata")
            return

        subscription = await get_or_create_subscription(self.uow, UUID(business_id))
        subscription.plan_type = PlanType(plan_type)
        subscription.status = SubscriptionStatus.ACTIVE
        subscription.stripe_subscription_id = _object_id(session.get("subscription"))
        subscription.current_period_end = utc_now() + SUBSCRIPTION_PERIOD
        await self.uow.subscriptions.update(subscription)
        logger.info(f"Subscription {plan_type} activated for business {business_id}")

    async def _subscription_updated(self, remote: Dict[str, Any]) -> None:
        subscription = await self.uow.subscriptions.get_by_stripe_id(remote.get("id", ""))
        if subscription is None:
            logger.warning(f"Subscription not found for provider id {remote.get('id')}")
            return

        if remote.get("status") in ACTIVE_PROVIDER_STATUSES:
            subscription.status = SubscriptionStatus.ACTIVE
        else:
            subscription.status = SubscriptionStatus.CANCELLED
        period_end = remote.get("current_period_end")
        if period_end:
            subscription.current_period_end = datetime.fromtimestamp(
                int(period_end), tz=timezone.utc
            ).replace(tzinfo=None)
        await self.uow.subscriptions.update(subscription)
        logger.info(f"Subscription updated for business {subscription.business_id}")

    async def _subscription_deleted(self, remote: Dict[str, Any]) -> None:
        subscription = await self.uow.subscriptions.get_by_stripe_id(remote.get("id", ""))
        if subscription is None:
            return
        subscription.status = SubscriptionStatus.CANCELLED
        await self.uow.subscriptions.update(subscription)
        logger.info(f"Subscription cancelled for business {subscription.business_id}")

    async def _payment_failed(self, invoice: Dict[str, Any]) -> None:
        stripe_id = _object_id(invoice.get("subscription"))
        if not stripe_id:
            return
        subscription = await self.uow.subscriptions.get_by_stripe_id(stripe_id)
        if subscription is not None:
            subscription.status = SubscriptionStatus.PAST_DUE
            await self.uow.subscriptions.update(subscription)
        logger.warning(f"Payment failed for provider invoice {invoice.get('id')}")


def _object_id(value: Any) -> Optional[str]:
    """Provider references arrive either as an id string or an expanded object"""
    if isinstance(value, dict):
        return value.get("id")
    return value
