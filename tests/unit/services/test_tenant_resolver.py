from uuid import uuid4

import pytest

from src.app.services.tenant_resolver import TenantResolver
from src.domain.entities import Business, BusinessCleaner, UserRole


@pytest.mark.asyncio
async def test_owner_resolves_to_owned_business(mock_uow):
    owner_id = uuid4()
    business = Business(user_id=owner_id, name="Sparkle")
    mock_uow.businesses.get_by_owner.return_value = business

    result = await TenantResolver(mock_uow).resolve(owner_id, UserRole.OWNER)

    assert result.is_ok()
    assert result.value == business.id
    mock_uow.cleaners.get_first_active.assert_not_called()


@pytest.mark.asyncio
async def test_cleaner_resolves_to_first_active_link(mock_uow):
    cleaner_id = uuid4()
    link = BusinessCleaner(business_id=uuid4(), cleaner_id=cleaner_id)
    mock_uow.cleaners.get_first_active.return_value = link

    result = await TenantResolver(mock_uow).resolve(cleaner_id, UserRole.CLEANER)

    assert result.value == link.business_id
    mock_uow.businesses.get_by_owner.assert_not_called()


@pytest.mark.asyncio
async def test_unlinked_cleaner_has_no_business(mock_uow):
    mock_uow.cleaners.get_first_active.return_value = None
    resolver = TenantResolver(mock_uow)

    result = await resolver.resolve(uuid4(), UserRole.CLEANER)

    assert result.is_err()
    assert result.error.code == "BUSINESS_NOT_FOUND"
    assert await resolver.resolve_or_none(uuid4(), UserRole.CLEANER) is None


@pytest.mark.asyncio
async def test_lookups_are_memoised_per_resolver(mock_uow):
    owner_id = uuid4()
    mock_uow.businesses.get_by_owner.return_value = Business(user_id=owner_id, name="Sparkle")
    resolver = TenantResolver(mock_uow)

    await resolver.resolve(owner_id, UserRole.OWNER)
    await resolver.resolve(owner_id, UserRole.OWNER)

    mock_uow.businesses.get_by_owner.assert_awaited_once_with(owner_id)
