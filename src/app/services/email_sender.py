from abc import ABC, abstractmethod
from typing import Optional


class IEmailSender(ABC):
    """Transactional email delivery"""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        """Send one email"""
        pass
