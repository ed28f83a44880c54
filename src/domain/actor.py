from dataclasses import dataclass
from uuid import UUID

from src.domain.entities.enums import UserRole


@dataclass(frozen=True)
class Actor:
    """The authenticated user a request is performed on behalf of"""

    id: UUID
    email: str
    role: UserRole
