"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform-wide role of an authenticated user"""

    OWNER = "OWNER"
    CLEANER = "CLEANER"
    ADMIN = "ADMIN"


class CleanerStatus(str, Enum):
    """Staff roster link status"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class InvitationStatus(str, Enum):
    """Cleaner invitation status"""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    EXPIRED = "EXPIRED"


class JobType(str, Enum):
    ONE_OFF = "ONE_OFF"
    RECURRING = "RECURRING"


class JobFrequency(str, Enum):
    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"


class JobStatus(str, Enum):
    """Job lifecycle, forward-only"""

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class PhotoType(str, Enum):
    BEFORE = "BEFORE"
    AFTER = "AFTER"


class InvoiceStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "BANK_TRANSFER"
    CARD = "CARD"
    CASH = "CASH"


class PlanType(str, Enum):
    """Subscription tiers"""

    FREE = "FREE"
    SOLO = "SOLO"
    SMALL_TEAM = "SMALL_TEAM"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    PAST_DUE = "PAST_DUE"
