from unittest.mock import AsyncMock, MagicMock

import pytest
import stripe

from src.adapter.services.stripe_payment_gateway import StripePaymentGateway
from src.app.services.errors import ProviderError


def _gateway(create_async: AsyncMock) -> StripePaymentGateway:
    gateway = StripePaymentGateway("sk_test_123", "whsec_123")
    gateway.client = MagicMock()
    gateway.client.checkout.sessions.create_async = create_async
    return gateway


async def _checkout(gateway: StripePaymentGateway):
    return await gateway.create_checkout_session(
        price_id="price_pro",
        customer_email="owner@sparkle.co.uk",
        success_url="https://app.test/success",
        cancel_url="https://app.test/cancel",
        metadata={"user_id": "u-1", "plan_id": "pro"},
    )


def test_timeout_is_set_on_sdk_http_client(monkeypatch):
    http_client = MagicMock()
    monkeypatch.setattr(stripe, "HTTPXClient", http_client)

    StripePaymentGateway("sk_test_123", "whsec_123", timeout=7.0)

    http_client.assert_called_once_with(timeout=7.0)


@pytest.mark.asyncio
async def test_checkout_session_created():
    create = AsyncMock(return_value=MagicMock(id="cs_1", url="https://checkout.test/cs_1"))
    gateway = _gateway(create)

    session = await _checkout(gateway)

    assert session.id == "cs_1"
    params = create.call_args.kwargs["params"]
    assert params["mode"] == "subscription"
    assert params["subscription_data"] == {"metadata": {"user_id": "u-1", "plan_id": "pro"}}


@pytest.mark.asyncio
async def test_stripe_timeout_becomes_provider_error():
    gateway = _gateway(AsyncMock(side_effect=stripe.APIConnectionError("Request timed out")))

    with pytest.raises(ProviderError) as exc_info:
        await _checkout(gateway)

    assert exc_info.value.provider == "payment"


@pytest.mark.asyncio
async def test_unconfigured_gateway_refuses_checkout():
    gateway = StripePaymentGateway("", "")

    with pytest.raises(ProviderError):
        await _checkout(gateway)
