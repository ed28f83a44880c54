"""
Dashboard Stats Use Case
"""

from datetime import timedelta

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.cleaners.dtos import BusinessSummary
from src.app.use_cases.common import FORBIDDEN
from src.app.use_cases.jobs.views import build_job_views
from src.domain.actor import Actor
from src.domain.base import utc_now
from src.domain.billing import month_bounds
from src.domain.entities import JobStatus
from src.domain.permissions import Action, can

from .dtos import DashboardStatsResponse

UPCOMING_DAYS = 7
UPCOMING_LIMIT = 5


class GetDashboardStatsUseCase:
    """
    Use case for the dashboard.

    Business Rules:
    - Owners get today's jobs, this month's earnings and the unpaid invoice count
    - Cleaners get their own jobs for today, the next 7 days (at most 5),
      jobs in progress, jobs completed this week and their business
    - A cleaner without an ACTIVE link gets empty figures
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(self, actor: Actor) -> Result[DashboardStatsResponse]:
        if not can(actor.role, Action.DASHBOARD_VIEW):
            return Return.err(FORBIDDEN)

        now = utc_now()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        tomorrow = today + timedelta(days=1)

        async with self.uow:
            business_id = await self.tenants.resolve_or_none(actor.id, actor.role)
            if business_id is None:
                return Return.ok(
                    DashboardStatsResponse(role=actor.role.value, today_jobs=0, today_jobs_list=[])
                )

            owner_view = can(actor.role, Action.JOB_VIEW_ALL)
            cleaner_id = None if owner_view else actor.id
            include_invoices = can(actor.role, Action.INVOICE_VIEW)

            today_jobs = await self.uow.jobs.list(
                business_id, cleaner_id=cleaner_id, start=today, end=tomorrow
            )
            stats = DashboardStatsResponse(
                role=actor.role.value,
                today_jobs=len(today_jobs),
                today_jobs_list=await build_job_views(
                    self.uow, business_id, today_jobs, include_invoices
                ),
            )

            if owner_view:
                start, end = month_bounds(now.month, now.year)
                stats.monthly_earnings = await self.uow.invoices.sum_paid_between(
                    business_id, start, end
                )
                stats.unpaid_invoices = await self.uow.invoices.count_unpaid(business_id)
                return Return.ok(stats)

            business = await self.uow.businesses.get_by_id(business_id)
            stats.business = BusinessSummary.from_entity(business) if business else None

            upcoming = [
                job
                for job in await self.uow.jobs.list(
                    business_id,
                    cleaner_id=actor.id,
                    start=tomorrow,
                    end=tomorrow + timedelta(days=UPCOMING_DAYS),
                )
                if job.status in (JobStatus.SCHEDULED, JobStatus.IN_PROGRESS)
            ][:UPCOMING_LIMIT]
            in_progress = await self.uow.jobs.list(
                business_id, cleaner_id=actor.id, status=JobStatus.IN_PROGRESS
            )
            week_start = today - timedelta(days=today.weekday())

            stats.upcoming_jobs = await build_job_views(self.uow, business_id, upcoming)
            stats.in_progress_jobs = await build_job_views(self.uow, business_id, in_progress)
            stats.completed_this_week = await self.uow.jobs.count(
                business_id,
                cleaner_id=actor.id,
                start=week_start,
                end=week_start + timedelta(days=7),
                status=JobStatus.COMPLETED,
            )
            return Return.ok(stats)
