"""
Payment Use Cases
"""

from .create_checkout_session_use_case import CreateCheckoutSessionUseCase
from .dtos import CheckoutSessionResponse, WebhookAck
from .handle_payment_webhook_use_case import HandlePaymentWebhookUseCase

__all__ = [
    "CreateCheckoutSessionUseCase",
    "HandlePaymentWebhookUseCase",
    "CheckoutSessionResponse",
    "WebhookAck",
]
