from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.api.error import to_http_error
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.reports import (
    BusinessReportResponse,
    ClientReportResponse,
    ExportReportUseCase,
    GetBusinessReportUseCase,
    GetClientReportUseCase,
    ReportType,
)
from src.depends import get_current_user, get_tenant_resolver, get_unit_of_work
from src.domain.actor import Actor

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/business", response_model=BusinessReportResponse)
async def business_report(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Jobs, invoices and totals for a period (default: last 30 days)

    Raises:
        - 403 Forbidden: Caller is not an owner
        - 404 Not Found: BUSINESS_NOT_FOUND
        - 422 Unprocessable Entity: start_date after end_date
    """
    result = await GetBusinessReportUseCase(uow, tenants).execute(actor, start_date, end_date)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/client/{client_id}", response_model=ClientReportResponse)
async def client_report(
    client_id: UUID,
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """Lifetime jobs and spend of one client"""
    result = await GetClientReportUseCase(uow, tenants).execute(actor, client_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/export")
async def export_report(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    type: ReportType = Query(ReportType.ALL),
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Business report as a CSV attachment

    Raises:
        - 403 Forbidden: Caller is not an owner
        - 422 Unprocessable Entity: Unknown type or start_date after end_date
    """
    result = await ExportReportUseCase(uow, tenants).execute(actor, start_date, end_date, type)

    if result.is_err():
        raise to_http_error(result.error)

    export = result.value
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.file_name}"'},
    )
