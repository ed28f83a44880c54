"""
Role-based access policy.

The whole policy is the ROLE_PERMISSIONS table: adding a role or an action is a
change to that mapping only. Nothing here performs I/O.
"""

from enum import Enum
from typing import FrozenSet

from src.domain.entities.enums import UserRole


class Action(str, Enum):
    """Permission definitions"""

    # Business
    BUSINESS_VIEW = "business:view"
    BUSINESS_MANAGE = "business:manage"

    # Staff roster
    CLEANER_MANAGE = "cleaner:manage"

    # Clients
    CLIENT_VIEW = "client:view"
    CLIENT_MANAGE = "client:manage"

    # Jobs
    JOB_VIEW = "job:view"
    JOB_VIEW_ALL = "job:view_all"
    JOB_MANAGE = "job:manage"
    JOB_ASSIGN_CLEANER = "job:assign_cleaner"
    JOB_UPDATE_STATUS = "job:update_status"
    JOB_UPDATE_CHECKLIST = "job:update_checklist"
    JOB_UPLOAD_PHOTO = "job:upload_photo"
    JOB_SHARE = "job:share"

    # Invoices
    INVOICE_VIEW = "invoice:view"
    INVOICE_MANAGE = "invoice:manage"

    # Billing
    SUBSCRIPTION_MANAGE = "subscription:manage"

    REPORT_VIEW = "report:view"

    DASHBOARD_VIEW = "dashboard:view"
    PLATFORM_ADMIN = "platform:admin"


_OWNER_PERMISSIONS = frozenset(
    {
        Action.BUSINESS_VIEW,
        Action.BUSINESS_MANAGE,
        Action.CLEANER_MANAGE,
        Action.CLIENT_VIEW,
        Action.CLIENT_MANAGE,
        Action.JOB_VIEW,
        Action.JOB_VIEW_ALL,
        Action.JOB_MANAGE,
        Action.JOB_ASSIGN_CLEANER,
        Action.JOB_UPDATE_STATUS,
        Action.JOB_UPDATE_CHECKLIST,
        Action.JOB_UPLOAD_PHOTO,
        Action.JOB_SHARE,
        Action.INVOICE_VIEW,
        Action.INVOICE_MANAGE,
        Action.SUBSCRIPTION_MANAGE,
        Action.REPORT_VIEW,
        Action.DASHBOARD_VIEW,
    }
)

ROLE_PERMISSIONS = {
    UserRole.OWNER: _OWNER_PERMISSIONS,
    # Admins act as owners of their own business plus platform screens
    UserRole.ADMIN: _OWNER_PERMISSIONS | {Action.PLATFORM_ADMIN},
    # Cleaners only see and progress the jobs assigned to them
    UserRole.CLEANER: frozenset(
        {
            Action.BUSINESS_VIEW,
            Action.CLIENT_VIEW,
            Action.JOB_VIEW,
            Action.JOB_UPDATE_STATUS,
            Action.JOB_UPDATE_CHECKLIST,
            Action.JOB_UPLOAD_PHOTO,
            Action.JOB_SHARE,
            Action.DASHBOARD_VIEW,
        }
    ),
}


def permissions_for(role: UserRole) -> FrozenSet[Action]:
    """Get permissions for a given role"""
    return ROLE_PERMISSIONS.get(UserRole(role), frozenset())


def can(role: UserRole, action: Action) -> bool:
    """Check whether a role is allowed to perform an action"""
    return action in permissions_for(role)
