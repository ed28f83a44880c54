"""
Domain Entities

All domain entities organized by model.
Each aggregate in its own file.
"""

# Export all enums
from .enums import (
    CleanerStatus,
    InvitationStatus,
    InvoiceStatus,
    JobFrequency,
    JobStatus,
    JobType,
    PaymentMethod,
    PhotoType,
    PlanType,
    SubscriptionStatus,
    UserRole,
)

# Export all entities
from .user import User
from .business import Business
from .business_cleaner import BusinessCleaner
from .cleaner_invitation import CleanerInvitation
from .client import Client
from .job import Job, JobChecklistItem, JobPhoto
from .invoice import Invoice, InvoiceCounter
from .subscription import JobUsage, Subscription

__all__ = [
    # Enums
    "UserRole",
    "CleanerStatus",
    "InvitationStatus",
    "JobType",
    "JobFrequency",
    "JobStatus",
    "PhotoType",
    "InvoiceStatus",
    "PaymentMethod",
    "PlanType",
    "SubscriptionStatus",
    # Entities
    "User",
    "Business",
    "BusinessCleaner",
    "CleanerInvitation",
    "Client",
    "Job",
    "JobChecklistItem",
    "JobPhoto",
    "Invoice",
    "InvoiceCounter",
    "Subscription",
    "JobUsage",
]
