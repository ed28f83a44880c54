"""
BusinessCleaner Entity

Staff roster link between a business and a cleaner account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import CleanerStatus


class BusinessCleaner(SQLModel, table=True):
    """
    BusinessCleaner entity - "this cleaner currently works for this business".

    Business Rules:
    - Unique per (business_id, cleaner_id)
    - A cleaner holds at most one ACTIVE link at a time
    - Deactivation flips status; removal deletes the row, never the user
    """

    __tablename__ = "business_cleaners"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)
    cleaner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    status: CleanerStatus = Field(default=CleanerStatus.ACTIVE)
    invited_by: Optional[UUID] = Field(default=None, foreign_key="users.id")
    activated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("business_id", "cleaner_id", name="uq_business_cleaner"),
        Index("idx_business_cleaner_status", "cleaner_id", "status"),
    )
