from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import to_http_error
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.clients import (
    ClientResponse,
    CreateClientUseCase,
    DeleteClientResponse,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientJobsUseCase,
    ListClientsUseCase,
    UpdateClientUseCase,
)
from src.app.use_cases.jobs import JobResponse
from src.depends import get_current_user, get_tenant_resolver, get_unit_of_work
from src.domain.actor import Actor

router = APIRouter(prefix="/clients", tags=["Clients"])


class CreateClientRequest(BaseModel):
    """
    Client HTTP request payload

    notes is a free-form object (access codes, pets, preferences).
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[Dict[str, Any]] = None


class UpdateClientRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[Dict[str, Any]] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ClientResponse)
async def create_client(
    request: CreateClientRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: Caller cannot manage clients
        - 404 Not Found: BUSINESS_NOT_FOUND
    """
    result = await CreateClientUseCase(uow, tenants).execute(
        actor,
        name=request.name,
        email=request.email,
        phone=request.phone,
        address=request.address,
        notes=request.notes,
    )

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("", response_model=List[ClientResponse])
async def list_clients(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Clients of the caller's business, newest first

    A cleaner without an active employer gets an empty list.
    """
    result = await ListClientsUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND (also for other businesses' clients)
    """
    result = await GetClientUseCase(uow, tenants).execute(actor, client_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    request: UpdateClientRequest,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Raises:
        - 403 Forbidden: Caller cannot manage clients
        - 404 Not Found: CLIENT_NOT_FOUND
    """
    changes = request.model_dump(exclude_unset=True)
    result = await UpdateClientUseCase(uow, tenants).execute(actor, client_id, changes)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete("/{client_id}", response_model=DeleteClientResponse)
async def delete_client(
    client_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Delete a client and its jobs

    Raises:
        - 403 Forbidden: Caller cannot manage clients
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: CLIENT_HAS_INVOICES, CLIENT_HAS_ACTIVE_JOBS
    """
    result = await DeleteClientUseCase(uow, tenants).execute(actor, client_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/{client_id}/jobs", response_model=List[JobResponse])
async def list_client_jobs(
    client_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Job history for one client

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND
    """
    result = await ListClientJobsUseCase(uow, tenants).execute(actor, client_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
