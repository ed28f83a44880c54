"""
Staff Roster Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.repositories.business_cleaner_repository import RosterEntry
from src.domain.entities import Business, BusinessCleaner, User


class CleanerResponse(BaseModel):
    """A roster entry: the link plus the cleaner's account and workload"""

    id: str
    business_id: str
    cleaner_id: str
    email: str
    status: str
    invited_by: Optional[str] = None
    activated_at: Optional[datetime] = None
    created_at: datetime
    total_jobs: int = 0
    today_jobs: int = 0

    @classmethod
    def from_link(
        cls, link: BusinessCleaner, cleaner: User, total_jobs: int = 0, today_jobs: int = 0
    ) -> "CleanerResponse":
        return cls(
            id=str(link.id),
            business_id=str(link.business_id),
            cleaner_id=str(link.cleaner_id),
            email=cleaner.email,
            status=link.status.value,
            invited_by=str(link.invited_by) if link.invited_by else None,
            activated_at=link.activated_at,
            created_at=link.created_at,
            total_jobs=total_jobs,
            today_jobs=today_jobs,
        )

    @classmethod
    def from_entry(cls, entry: RosterEntry) -> "CleanerResponse":
        return cls.from_link(entry.link, entry.cleaner, entry.total_jobs, entry.today_jobs)


class InvitationInfo(BaseModel):
    """Invitation sent to a newly provisioned cleaner"""

    id: str
    expires_at: datetime
    email_sent: bool


class InviteCleanerResponse(BaseModel):
    """Response for invite cleaner use case"""

    cleaner: CleanerResponse
    invitation: Optional[InvitationInfo] = None


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    status: str
    email: str


class BusinessSummary(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_entity(cls, business: Business) -> "BusinessSummary":
        return cls(
            id=str(business.id), name=business.name, phone=business.phone, address=business.address
        )


class CleanerBusinessResponse(BaseModel):
    """The business a cleaner currently works for"""

    business: BusinessSummary
    status: str
    activated_at: Optional[datetime] = None


class RemoveCleanerResponse(BaseModel):
    status: str
