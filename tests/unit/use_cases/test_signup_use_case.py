from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.services.errors import IdentityExistsError, ProviderError
from src.app.services.identity_provider import IdentityUser
from src.app.use_cases.auth.dtos import SignupCommand
from src.app.use_cases.auth.signup_use_case import SignupUseCase
from src.domain.entities import User


@pytest.fixture
def identity():
    return AsyncMock()


@pytest.mark.asyncio
async def test_signup_creates_owner_keyed_by_identity_id(mock_uow, identity):
    identity_id = uuid4()
    mock_uow.users.get_by_email.return_value = None
    identity.create_user.return_value = IdentityUser(id=identity_id, email="new@example.com")
    mock_uow.users.create.side_effect = lambda user: user

    result = await SignupUseCase(mock_uow, identity).execute(
        SignupCommand(email="new@example.com", password="s3cretpass")
    )

    assert result.value.user.id == str(identity_id)
    assert result.value.user.role == "OWNER"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_signup_rejects_known_email(mock_uow, identity):
    mock_uow.users.get_by_email.return_value = User(email="taken@example.com")

    result = await SignupUseCase(mock_uow, identity).execute(
        SignupCommand(email="taken@example.com", password="s3cretpass")
    )

    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    identity.create_user.assert_not_called()


@pytest.mark.asyncio
async def test_signup_maps_provider_conflict(mock_uow, identity):
    mock_uow.users.get_by_email.return_value = None
    identity.create_user.side_effect = IdentityExistsError()

    result = await SignupUseCase(mock_uow, identity).execute(
        SignupCommand(email="taken@example.com", password="s3cretpass")
    )

    assert result.error.code == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_signup_reports_provider_outage(mock_uow, identity):
    mock_uow.users.get_by_email.return_value = None
    identity.create_user.side_effect = ProviderError("identity", "503")

    result = await SignupUseCase(mock_uow, identity).execute(
        SignupCommand(email="new@example.com", password="s3cretpass")
    )

    assert result.error.code == "IDENTITY_PROVIDER_ERROR"
    mock_uow.users.create.assert_not_called()
