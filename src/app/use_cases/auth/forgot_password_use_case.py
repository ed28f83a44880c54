"""
Forgot Password Use Case

Emails a recovery link generated by the identity provider.
"""

import logging

from libs.result import Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.errors import ProviderError
from src.app.services.identity_provider import IIdentityProvider
from src.app.use_cases.common import dependency_error

from .dtos import StatusResponse

logger = logging.getLogger(__name__)

GENERIC_RESPONSE = StatusResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - No email enumeration: the response is the same whether or not the
      account exists
    - The link redirects to the frontend's reset-password page
    """

    def __init__(self, identity: IIdentityProvider, email_sender: IEmailSender, frontend_url: str):
        self.identity = identity
        self.email_sender = email_sender
        self.frontend_url = frontend_url.rstrip("/")

    async def execute(self, email: str) -> Result[StatusResponse]:
        try:
            link = await self.identity.generate_recovery_link(
                email, redirect_to=f"{self.frontend_url}/reset-password"
            )
            if link is None:
                return Return.ok(GENERIC_RESPONSE)

            await self.email_sender.send(
                to=email,
                subject="Reset your password",
                html=(
                    "<p>We received a request to reset your password.</p>"
                    f'<p><a href="{link}">Choose a new password</a></p>'
                    "<p>If you did not ask for this, you can ignore this email.</p>"
                ),
                text=f"Reset your password: {link}",
            )
        except ProviderError as exc:
            logger.error(f"Password recovery failed: {exc}")
            return Return.err(dependency_error(exc))

        return Return.ok(GENERIC_RESPONSE)
