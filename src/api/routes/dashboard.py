from fastapi import APIRouter, Depends

from src.api.error import to_http_error
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.dashboard import DashboardStatsResponse, GetDashboardStatsUseCase
from src.depends import get_current_user, get_tenant_resolver, get_unit_of_work
from src.domain.actor import Actor

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    actor: Actor = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenants: TenantResolver = Depends(get_tenant_resolver),
):
    """
    Role-specific dashboard

    Owners get today's jobs, monthly earnings and unpaid invoices;
    cleaners get their employer, upcoming work and weekly progress.
    """
    result = await GetDashboardStatsUseCase(uow, tenants).execute(actor)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
