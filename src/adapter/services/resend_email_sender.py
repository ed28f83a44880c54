import logging
from typing import Optional

import httpx

from src.app.services.email_sender import IEmailSender
from src.app.services.errors import ProviderError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailSender(IEmailSender):
    """Email delivery through the Resend HTTP API"""

    def __init__(
        self,
        api_key: str,
        sender: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.transport = transport

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        if not self.api_key:
            logger.warning(f"Email is not configured; skipping '{subject}' to {to}")
            return

        payload = {"from": self.sender, "to": to, "subject": subject, "html": html}
        if text:
            payload["text"] = text
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(RESEND_API_URL, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ProviderError("email", str(exc)) from exc
        logger.info(f"Email '{subject}' sent to {to}")
