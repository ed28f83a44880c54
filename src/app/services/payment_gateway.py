from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


class IPaymentGateway(ABC):
    """Hosted checkout and webhook verification"""

    @abstractmethod
    async def create_checkout_session(
        self,
        price_id: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> CheckoutSession:
        """Create a subscription checkout session"""
        pass

    @abstractmethod
    def parse_webhook(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """Verify the signature and return the event as a plain dict"""
        pass
