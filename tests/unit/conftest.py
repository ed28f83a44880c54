from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from libs.result import Return
from src.domain.actor import Actor
from src.domain.entities import UserRole


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable
    uow.users = AsyncMock()
    uow.businesses = AsyncMock()
    uow.cleaners = AsyncMock()
    uow.invitations = AsyncMock()
    uow.clients = AsyncMock()
    uow.jobs = AsyncMock()
    uow.invoices = AsyncMock()
    uow.subscriptions = AsyncMock()
    return uow


@pytest.fixture
def business_id():
    return uuid4()


@pytest.fixture
def tenants(business_id):
    """Resolver that always answers with business_id"""
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=Return.ok(business_id))
    resolver.resolve_or_none = AsyncMock(return_value=business_id)
    return resolver


@pytest.fixture
def owner():
    return Actor(id=uuid4(), email="owner@sparkle.co.uk", role=UserRole.OWNER)


@pytest.fixture
def cleaner():
    return Actor(id=uuid4(), email="cleaner@sparkle.co.uk", role=UserRole.CLEANER)
