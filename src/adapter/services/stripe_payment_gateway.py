import json
import logging
from typing import Any, Dict

import stripe

from src.app.services.errors import InvalidWebhookSignatureError, ProviderError
from src.app.services.payment_gateway import CheckoutSession, IPaymentGateway

logger = logging.getLogger(__name__)

WEBHOOK_TOLERANCE_SECONDS = 300


class StripePaymentGateway(IPaymentGateway):
    """Stripe checkout and webhook handling"""

    def __init__(self, secret_key: str, webhook_secret: str, timeout: float = 10.0):
        self.webhook_secret = webhook_secret
        # Timeout is enforced inside the SDK's httpx client
        self.client = (
            stripe.StripeClient(secret_key, http_client=stripe.HTTPXClient(timeout=timeout))
            if secret_key
            else None
        )

    async def create_checkout_session(
        self,
        price_id: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> CheckoutSession:
        if self.client is None:
            raise ProviderError("payment", "Stripe is not configured")

        try:
            session = await self.client.checkout.sessions.create_async(
                params={
                    "mode": "subscription",
                    "payment_method_types": ["card"],
                    "line_items": [{"price": price_id, "quantity": 1}],
                    "customer_email": customer_email,
                    "success_url": success_url,
                    "cancel_url": cancel_url,
                    "metadata": metadata,
                    "subscription_data": {"metadata": metadata},
                }
            )
        except stripe.StripeError as exc:
            logger.error(f"Stripe checkout session failed: {exc}")
            raise ProviderError("payment", str(exc)) from exc
        return CheckoutSession(id=session.id, url=session.url)

    def parse_webhook(self, payload: bytes, signature: str) -> Dict[str, Any]:
        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"),
                signature,
                self.webhook_secret,
                WEBHOOK_TOLERANCE_SECONDS,
            )
            return json.loads(payload)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise InvalidWebhookSignatureError(str(exc)) from exc
