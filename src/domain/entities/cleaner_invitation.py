"""
CleanerInvitation Entity

Single-use link that lets a newly provisioned cleaner choose a password.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import InvitationStatus


class CleanerInvitation(SQLModel, table=True):
    """
    CleanerInvitation entity.

    Business Rules:
    - Created when an owner invites an email with no existing account
    - Only the SHA-256 hash of the token is stored
    - Expires after INVITATION_TTL_DAYS (7 by default)
    - Accepting sets the cleaner's password and flips status to ACCEPTED
    """

    __tablename__ = "cleaner_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)
    cleaner_id: UUID = Field(foreign_key="users.id", nullable=False)
    email: str = Field(max_length=255, index=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)
    status: InvitationStatus = Field(default=InvitationStatus.PENDING)
    invited_by: UUID = Field(foreign_key="users.id")

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_cleaner_invitation_status", "status"),)
