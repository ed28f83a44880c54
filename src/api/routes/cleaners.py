from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import to_http_error
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.cleaners import (
    ActivateCleanerUseCase,
    CleanerBusinessResponse,
    CleanerResponse,
    DeactivateCleanerUseCase,
    GetCleanerBusinessUseCase,
    InviteCleanerResponse,
    InviteCleanerUseCase,
    ListCleanersUseCase,
    RemoveCleanerResponse,
    RemoveCleanerUseCase,
)
from src.depends import (
    get_current_user,
    get_email_sender,
    get_identity_provider,
    get_tenant_resolver,
    get_unit_of_work,
)
from src.domain.actor import Actor

router = APIRouter(prefix="/business/cleaners", tags=["Cleaners"])


class InviteCleanerRequest(BaseModel):
    """
    Add a cleaner to the roster

    Unknown emails get an account with a temporary password and an
    invitation email; known cleaners are linked directly.
    """

    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)


@router.get("", response_model=List[CleanerResponse])
async def list_cleaners(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Roster of the owner's business with job counts

    Raises:
        - 403 Forbidden: Caller cannot manage cleaners
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await ListCleanersUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InviteCleanerResponse)
async def invite_cleaner(
    request: InviteCleanerRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
    identity: IIdentityProvider = Depends(get_identity_provider),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Invite or link a cleaner

    Raises:
        - 400 Bad Request: CANNOT_ADD_OWNER
        - 403 Forbidden: Caller cannot manage cleaners
        - 409 Conflict: CLEANER_ALREADY_LINKED, CLEANER_ACTIVE_ELSEWHERE, EMAIL_ALREADY_EXISTS
        - 502 Bad Gateway: Identity provider unavailable
    """
    use_case = InviteCleanerUseCase(
        uow,
        tenants,
        identity,
        email_sender,
        frontend_url=ApplicationConfig.FRONTEND_URL,
        invitation_ttl_days=ApplicationConfig.INVITATION_TTL_DAYS,
    )
    result = await use_case.execute(actor, request.email, request.name)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/my-business", response_model=CleanerBusinessResponse)
async def get_my_business(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    The business a cleaner currently works for

    Raises:
        - 404 Not Found: BUSINESS_NOT_FOUND when the cleaner has no active link
    """
    result = await GetCleanerBusinessUseCase(uow).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/{cleaner_id}/deactivate", response_model=CleanerResponse)
async def deactivate_cleaner(
    cleaner_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: Caller cannot manage cleaners
        - 404 Not Found: CLEANER_NOT_FOUND
    """
    result = await DeactivateCleanerUseCase(uow, tenants).execute(actor, cleaner_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/{cleaner_id}/activate", response_model=CleanerResponse)
async def activate_cleaner(
    cleaner_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: Caller cannot manage cleaners
        - 404 Not Found: CLEANER_NOT_FOUND
        - 409 Conflict: CLEANER_ACTIVE_ELSEWHERE
    """
    result = await ActivateCleanerUseCase(uow, tenants).execute(actor, cleaner_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete("/{cleaner_id}", response_model=RemoveCleanerResponse)
async def remove_cleaner(
    cleaner_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Unlink a cleaner from the roster; the account itself is kept

    Raises:
        - 403 Forbidden: Caller cannot manage cleaners
        - 404 Not Found: CLEANER_NOT_FOUND
    """
    result = await RemoveCleanerUseCase(uow, tenants).execute(actor, cleaner_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
