"""
Platform Admin DTOs
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def of(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=-(-total // limit))


class PlatformStatsResponse(BaseModel):
    total_businesses: int
    total_users: int
    total_jobs: int
    total_invoices: int
    active_subscriptions: int
    total_revenue: float
    recent_businesses: int
    businesses_by_plan: Dict[str, int]
    users_by_role: Dict[str, int]


class OwnerSummary(BaseModel):
    id: str
    email: str
    role: str
    created_at: datetime


class SubscriptionSummary(BaseModel):
    plan_type: str
    status: str
    current_period_end: datetime


class BusinessCounts(BaseModel):
    clients: int
    jobs: int
    invoices: int
    cleaners: int


class AdminBusinessEntry(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    vat_enabled: bool
    created_at: datetime
    owner: Optional[OwnerSummary] = None
    subscription: Optional[SubscriptionSummary] = None
    counts: BusinessCounts


class BusinessPageResponse(BaseModel):
    businesses: List[AdminBusinessEntry]
    pagination: Pagination


class RecentClient(BaseModel):
    id: str
    name: str
    created_at: datetime


class RecentJob(BaseModel):
    id: str
    client_name: Optional[str] = None
    scheduled_date: datetime
    status: str
    created_at: datetime


class RecentInvoice(BaseModel):
    id: str
    invoice_number: str
    total_amount: float
    status: str
    created_at: datetime


class AdminBusinessDetail(AdminBusinessEntry):
    recent_clients: List[RecentClient]
    recent_jobs: List[RecentJob]
    recent_invoices: List[RecentInvoice]


class AdminUserEntry(BaseModel):
    id: str
    email: str
    role: str
    created_at: datetime
    business_id: Optional[str] = None
    business_name: Optional[str] = None


class UserPageResponse(BaseModel):
    users: List[AdminUserEntry]
    pagination: Pagination
