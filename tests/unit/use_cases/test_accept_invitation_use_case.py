from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.services.errors import ProviderError
from src.app.use_cases.cleaners import AcceptInvitationUseCase
from src.app.use_cases.cleaners.invite_cleaner_use_case import hash_token
from src.domain.base import utc_now
from src.domain.entities import CleanerInvitation, InvitationStatus


def _invitation(expires_in=timedelta(days=3), status=InvitationStatus.PENDING):
    return CleanerInvitation(
        business_id=uuid4(),
        cleaner_id=uuid4(),
        email="maria@example.com",
        token_hash=hash_token("secret-token"),
        invited_by=uuid4(),
        status=status,
        expires_at=utc_now() + expires_in,
    )


@pytest.fixture
def identity():
    return AsyncMock()


@pytest.mark.asyncio
async def test_accept_sets_password_and_marks_accepted(mock_uow, identity):
    invitation = _invitation()
    mock_uow.invitations.get_by_token_hash.return_value = invitation
    mock_uow.invitations.update.side_effect = lambda inv: inv

    use_case = AcceptInvitationUseCase(mock_uow, identity)
    result = await use_case.execute("secret-token", "NewPass123!")

    assert result.is_ok()
    assert result.value.status == "ACCEPTED"
    assert result.value.email == "maria@example.com"
    mock_uow.invitations.get_by_token_hash.assert_called_once_with(hash_token("secret-token"))
    identity.update_password.assert_called_once_with(invitation.cleaner_id, "NewPass123!")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_token_is_invalid(mock_uow, identity):
    mock_uow.invitations.get_by_token_hash.return_value = None

    result = await AcceptInvitationUseCase(mock_uow, identity).execute("nope", "NewPass123!")

    assert result.error.code == "INVALID_INVITATION"
    identity.update_password.assert_not_called()


@pytest.mark.asyncio
async def test_used_invitation_is_invalid(mock_uow, identity):
    mock_uow.invitations.get_by_token_hash.return_value = _invitation(
        status=InvitationStatus.ACCEPTED
    )

    result = await AcceptInvitationUseCase(mock_uow, identity).execute("secret-token", "x" * 8)

    assert result.error.code == "INVALID_INVITATION"


@pytest.mark.asyncio
async def test_expired_invitation_is_marked_expired(mock_uow, identity):
    invitation = _invitation(expires_in=-timedelta(minutes=1))
    mock_uow.invitations.get_by_token_hash.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, identity).execute("secret-token", "x" * 8)

    assert result.error.code == "INVITATION_EXPIRED"
    assert invitation.status == InvitationStatus.EXPIRED
    mock_uow.commit.assert_called_once()
    identity.update_password.assert_not_called()


@pytest.mark.asyncio
async def test_provider_failure_leaves_invitation_pending(mock_uow, identity):
    invitation = _invitation()
    mock_uow.invitations.get_by_token_hash.return_value = invitation
    identity.update_password.side_effect = ProviderError("identity", "503")

    result = await AcceptInvitationUseCase(mock_uow, identity).execute("secret-token", "x" * 8)

    assert result.error.code == "IDENTITY_PROVIDER_ERROR"
    assert invitation.status == InvitationStatus.PENDING
    mock_uow.commit.assert_not_called()
