from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.business import (
    BusinessResponse,
    CreateBusinessUseCase,
    GetBusinessUseCase,
    ToggleVatUseCase,
    UpdateBusinessUseCase,
)
from src.depends import get_current_user, get_tenant_resolver, get_unit_of_work
from src.domain.actor import Actor

router = APIRouter(prefix="/business", tags=["Business"])


class CreateBusinessRequest(BaseModel):
    """Business profile submitted by an owner"""

    name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    vat_enabled: bool = False
    vat_number: Optional[str] = Field(None, max_length=50)
    invoice_template: Optional[str] = Field(None, max_length=50)


class UpdateBusinessRequest(BaseModel):
    """Partial update; only the fields sent are changed"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    vat_enabled: Optional[bool] = None
    vat_number: Optional[str] = Field(None, max_length=50)
    invoice_template: Optional[str] = Field(None, max_length=50)


class ToggleVatRequest(BaseModel):
    vat_enabled: bool
    vat_number: Optional[str] = Field(None, max_length=50)


@router.get("", response_model=BusinessResponse)
async def get_business(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    The caller's business (owners) or their active employer (cleaners)

    Raises:
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await GetBusinessUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BusinessResponse)
async def create_business(
    request: CreateBusinessRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create the caller's business with a FREE subscription

    Raises:
        - 403 Forbidden: Caller is not an owner
        - 409 Conflict: BUSINESS_ALREADY_EXISTS
    """
    result = await CreateBusinessUseCase(uow).execute(
        actor,
        name=request.name,
        phone=request.phone,
        address=request.address,
        vat_enabled=request.vat_enabled,
        vat_number=request.vat_number,
        invoice_template=request.invoice_template,
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("", response_model=BusinessResponse)
async def update_business(
    request: UpdateBusinessRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Update the business profile

    Raises:
        - 403 Forbidden: Caller is not an owner
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    changes = request.model_dump(exclude_unset=True)
    result = await UpdateBusinessUseCase(uow, tenants).execute(actor, changes)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("/vat", response_model=BusinessResponse)
async def toggle_vat(
    request: ToggleVatRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Enable or disable VAT on future invoices

    Raises:
        - 403 Forbidden: Caller is not an owner
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await ToggleVatUseCase(uow, tenants).execute(
        actor, request.vat_enabled, request.vat_number
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
