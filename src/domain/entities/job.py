"""
Job Entity

A scheduled cleaning appointment plus its checklist items and photos.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import JobFrequency, JobStatus, JobType, PhotoType


class Job(SQLModel, table=True):
    """
    Job entity - one occurrence of a cleaning appointment.

    Business Rules:
    - Status moves forward only: SCHEDULED -> IN_PROGRESS -> COMPLETED
    - Deletable only while SCHEDULED
    - RECURRING jobs are materialised as independent sibling rows; there is
      no series entity, so editing one occurrence never touches the others
    - reminder_sent is a one-shot latch reset by changing reminder_time or
      re-enabling reminders
    """

    __tablename__ = "jobs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)
    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)
    cleaner_id: Optional[UUID] = Field(default=None, foreign_key="users.id", index=True)

    type: JobType = Field(default=JobType.ONE_OFF)
    frequency: Optional[JobFrequency] = Field(default=None)
    scheduled_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    scheduled_time: Optional[str] = Field(default=None, max_length=5)
    status: JobStatus = Field(default=JobStatus.SCHEDULED)
    notes: Optional[str] = Field(default=None)

    # Reminders
    reminder_enabled: bool = Field(default=True)
    reminder_time: str = Field(default="1 day", max_length=20)
    reminder_sent: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_job_business_date", "business_id", "scheduled_date"),
        Index("idx_job_status", "status"),
    )


class JobChecklistItem(SQLModel, table=True):
    __tablename__ = "job_checklist_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    job_id: UUID = Field(foreign_key="jobs.id", nullable=False, index=True)
    item_text: str = Field(max_length=500)
    completed: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class JobPhoto(SQLModel, table=True):
    __tablename__ = "job_photos"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    job_id: UUID = Field(foreign_key="jobs.id", nullable=False, index=True)
    image_url: str = Field(max_length=1000)
    photo_type: PhotoType = Field(default=PhotoType.AFTER)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
