from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class IdentityUser:
    """Verified identity as reported by the identity provider"""

    id: UUID
    email: str


class IIdentityProvider(ABC):
    """External identity provider - token verification and account administration"""

    @abstractmethod
    async def verify_token(self, token: str) -> IdentityUser:
        """Exchange a bearer token for the identity it belongs to"""
        pass

    @abstractmethod
    async def create_user(self, email: str, password: str) -> IdentityUser:
        """Create a confirmed account"""
        pass

    @abstractmethod
    async def update_password(self, user_id: UUID, password: str) -> None:
        """Set a new password for an account"""
        pass

    @abstractmethod
    async def verify_password(self, email: str, password: str) -> bool:
        """Check an email/password pair without keeping the session"""
        pass

    @abstractmethod
    async def generate_recovery_link(self, email: str, redirect_to: str) -> Optional[str]:
        """Password recovery link, or None when the account does not exist"""
        pass
