import pytest

from src.domain.entities import UserRole
from src.domain.permissions import ROLE_PERMISSIONS, Action, can, permissions_for


def test_owner_manages_everything_except_platform():
    assert can(UserRole.OWNER, Action.JOB_MANAGE)
    assert can(UserRole.OWNER, Action.INVOICE_MANAGE)
    assert can(UserRole.OWNER, Action.CLEANER_MANAGE)
    assert not can(UserRole.OWNER, Action.PLATFORM_ADMIN)


def test_admin_is_owner_plus_platform():
    assert permissions_for(UserRole.ADMIN) == permissions_for(UserRole.OWNER) | {
        Action.PLATFORM_ADMIN
    }


@pytest.mark.parametrize(
    "action",
    [
        Action.JOB_MANAGE,
        Action.JOB_VIEW_ALL,
        Action.INVOICE_VIEW,
        Action.INVOICE_MANAGE,
        Action.CLIENT_MANAGE,
        Action.CLEANER_MANAGE,
        Action.SUBSCRIPTION_MANAGE,
        Action.REPORT_VIEW,
    ],
)
def test_cleaner_cannot_manage_business_data(action):
    assert not can(UserRole.CLEANER, action)


def test_cleaner_progresses_assigned_work():
    assert can(UserRole.CLEANER, Action.JOB_UPDATE_STATUS)
    assert can(UserRole.CLEANER, Action.JOB_UPLOAD_PHOTO)
    assert can(UserRole.CLEANER, Action.CLIENT_VIEW)


def test_role_strings_are_accepted():
    assert can("OWNER", Action.BUSINESS_MANAGE)


def test_every_role_has_an_entry():
    assert set(ROLE_PERMISSIONS) == set(UserRole)
