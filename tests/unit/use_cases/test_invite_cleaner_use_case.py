from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.services.errors import IdentityExistsError, ProviderError
from src.app.services.identity_provider import IdentityUser
from src.app.use_cases.cleaners import InviteCleanerUseCase, generate_temporary_password
from src.app.use_cases.cleaners.invite_cleaner_use_case import hash_token
from src.domain.entities import (
    Business,
    BusinessCleaner,
    CleanerStatus,
    User,
    UserRole,
)


@pytest.fixture
def identity():
    return AsyncMock()


@pytest.fixture
def email_sender():
    return AsyncMock()


@pytest.fixture
def use_case(mock_uow, tenants, identity, email_sender):
    mock_uow.cleaners.create.side_effect = lambda link: link
    mock_uow.users.create.side_effect = lambda user: user
    mock_uow.invitations.create.side_effect = lambda invitation: invitation
    return InviteCleanerUseCase(
        mock_uow, tenants, identity, email_sender, frontend_url="https://app.example.com/"
    )


def test_temporary_password_mixes_character_classes():
    password = generate_temporary_password()

    assert len(password) == 16
    assert any(c.isupper() for c in password)
    assert any(c.islower() for c in password)
    assert any(c.isdigit() for c in password)
    assert any(c in "!@#$%^&*" for c in password)


@pytest.mark.asyncio
async def test_new_email_creates_account_link_and_invitation(
    use_case, mock_uow, identity, email_sender, owner, business_id
):
    new_id = uuid4()
    mock_uow.users.get_by_email.return_value = None
    identity.create_user.return_value = IdentityUser(id=new_id, email="maria@example.com")
    mock_uow.businesses.get_by_id.return_value = Business(
        id=business_id, user_id=owner.id, name="Sparkle"
    )

    result = await use_case.execute(owner, "maria@example.com", "Maria")

    assert result.is_ok()
    response = result.value
    assert response.cleaner.cleaner_id == str(new_id)
    assert response.cleaner.status == "ACTIVE"
    assert response.invitation.email_sent is True

    created_user = mock_uow.users.create.call_args.args[0]
    assert created_user.role == UserRole.CLEANER

    invitation = mock_uow.invitations.create.call_args.args[0]
    email = email_sender.send.call_args.kwargs
    token = email["text"].split("token=")[1].split()[0]
    assert invitation.token_hash == hash_token(token)
    assert email["to"] == "maria@example.com"
    assert "https://app.example.com/accept-invitation?token=" in email["html"]
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_email_failure_still_returns_invitation(
    use_case, mock_uow, identity, email_sender, owner, business_id
):
    mock_uow.users.get_by_email.return_value = None
    identity.create_user.return_value = IdentityUser(id=uuid4(), email="maria@example.com")
    mock_uow.businesses.get_by_id.return_value = Business(
        id=business_id, user_id=owner.id, name="Sparkle"
    )
    email_sender.send.side_effect = ProviderError("email", "timeout")

    result = await use_case.execute(owner, "maria@example.com")

    assert result.is_ok()
    assert result.value.invitation.email_sent is False
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_existing_cleaner_is_linked_without_invitation(
    use_case, mock_uow, identity, owner
):
    existing = User(email="maria@example.com", role=UserRole.CLEANER)
    mock_uow.users.get_by_email.return_value = existing
    mock_uow.cleaners.get_link.return_value = None
    mock_uow.cleaners.get_first_active.return_value = None

    result = await use_case.execute(owner, "maria@example.com")

    assert result.is_ok()
    assert result.value.invitation is None
    identity.create_user.assert_not_called()
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_owner_email_cannot_be_added(use_case, mock_uow, owner):
    mock_uow.users.get_by_email.return_value = User(email="boss@example.com", role=UserRole.OWNER)

    result = await use_case.execute(owner, "boss@example.com")

    assert result.is_err()
    assert result.error.code == "CANNOT_ADD_OWNER"


@pytest.mark.asyncio
async def test_already_linked_cleaner_conflicts(use_case, mock_uow, owner, business_id):
    existing = User(email="maria@example.com", role=UserRole.CLEANER)
    mock_uow.users.get_by_email.return_value = existing
    mock_uow.cleaners.get_link.return_value = BusinessCleaner(
        business_id=business_id, cleaner_id=existing.id
    )

    result = await use_case.execute(owner, "maria@example.com")

    assert result.error.code == "CLEANER_ALREADY_LINKED"


@pytest.mark.asyncio
async def test_cleaner_active_elsewhere_conflicts(use_case, mock_uow, owner):
    existing = User(email="maria@example.com", role=UserRole.CLEANER)
    mock_uow.users.get_by_email.return_value = existing
    mock_uow.cleaners.get_link.return_value = None
    mock_uow.cleaners.get_first_active.return_value = BusinessCleaner(
        business_id=uuid4(), cleaner_id=existing.id, status=CleanerStatus.ACTIVE
    )

    result = await use_case.execute(owner, "maria@example.com")

    assert result.error.code == "CLEANER_ACTIVE_ELSEWHERE"
    mock_uow.cleaners.create.assert_not_called()


@pytest.mark.asyncio
async def test_identity_conflict_maps_to_email_exists(use_case, mock_uow, identity, owner):
    mock_uow.users.get_by_email.return_value = None
    identity.create_user.side_effect = IdentityExistsError()

    result = await use_case.execute(owner, "maria@example.com")

    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_cleaners_cannot_invite(use_case, cleaner):
    result = await use_case.execute(cleaner, "maria@example.com")

    assert result.error.code == "FORBIDDEN"
