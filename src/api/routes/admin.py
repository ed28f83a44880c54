"""
Admin API Routes - Platform Reporting Endpoints

Authentication is a normal bearer token; the caller must have role ADMIN.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.api.error import to_http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    AdminBusinessDetail,
    BusinessPageResponse,
    GetBusinessDetailUseCase,
    GetPlatformStatsUseCase,
    ListBusinessesUseCase,
    ListUsersUseCase,
    PlatformStatsResponse,
    UserPageResponse,
)
from src.depends import get_current_user, get_unit_of_work
from src.domain.actor import Actor

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", response_model=PlatformStatsResponse)
async def get_platform_stats(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Platform Stats

    User counts by role, business growth and subscriptions by status.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: Caller is not an admin
    """
    result = await GetPlatformStatsUseCase(uow).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/businesses", response_model=BusinessPageResponse)
async def list_businesses(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Paginated businesses with owner, plan and counts

    Raises:
        - 403 Forbidden: Caller is not an admin
    """
    result = await ListBusinessesUseCase(uow).execute(actor, page, limit)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/businesses/{business_id}", response_model=AdminBusinessDetail)
async def get_business_detail(
    business_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Raises:
        - 403 Forbidden: Caller is not an admin
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await GetBusinessDetailUseCase(uow).execute(actor, business_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/users", response_model=UserPageResponse)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Raises:
        - 403 Forbidden: Caller is not an admin
    """
    result = await ListUsersUseCase(uow).execute(actor, page, limit)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
