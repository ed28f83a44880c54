"""
User Entity

One row per authenticated identity.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - the local mirror of an identity provider account.

    Business Rules:
    - id is the identity provider's subject id
    - Email must be unique across all users
    - Role defaults to OWNER on sign-up, CLEANER when provisioned by an owner
    - Role may be changed by the user only before they own a business
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    role: UserRole = Field(default=UserRole.OWNER)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role", "role"),)
