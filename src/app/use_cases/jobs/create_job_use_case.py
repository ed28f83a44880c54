"""
Create Job Use Case

Schedules a job and, for recurring jobs, materialises the next occurrences.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import CLIENT_NOT_FOUND, FORBIDDEN, validation_error
from src.app.use_cases.subscriptions.usage import track_job_usage
from src.domain.actor import Actor
from src.domain.base import as_utc, utc_now
from src.domain.entities import (
    CleanerStatus,
    Job,
    JobChecklistItem,
    JobFrequency,
    JobType,
)
from src.domain.permissions import Action, can
from src.domain.scheduling import DEFAULT_REMINDER_TIME, recurring_dates, validate_schedule

from .dtos import CreateJobResponse
from .views import build_job_views

logger = logging.getLogger(__name__)

CLEANER_NOT_ON_ROSTER = Error("CLEANER_NOT_FOUND", "Cleaner is not an active member of your team")


async def ensure_active_cleaner(uow: UnitOfWork, business_id: UUID, cleaner_id: UUID) -> bool:
    link = await uow.cleaners.get_link(business_id, cleaner_id)
    return link is not None and link.status == CleanerStatus.ACTIVE


class CreateJobUseCase:
    """
    Use case for scheduling a job.

    Business Rules:
    - Client must belong to the caller's business
    - Assigned cleaner must be ACTIVE on the caller's roster
    - Date cannot be in the past; RECURRING requires a frequency
    - RECURRING creates 12 further independent occurrences at the cadence
    - The month's job usage counter is incremented once per request
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self,
        actor: Actor,
        client_id: UUID,
        scheduled_date: datetime,
        type: JobType = JobType.ONE_OFF,
        frequency: Optional[JobFrequency] = None,
        scheduled_time: Optional[str] = None,
        cleaner_id: Optional[UUID] = None,
        notes: Optional[str] = None,
        reminder_enabled: bool = True,
        reminder_time: Optional[str] = None,
        checklist: Optional[List[str]] = None,
    ) -> Result[CreateJobResponse]:
        if not can(actor.role, Action.JOB_MANAGE):
            return Return.err(FORBIDDEN)

        scheduled_date = as_utc(scheduled_date)
        now = utc_now()
        errors = validate_schedule(type, frequency, scheduled_date, reminder_time, now)
        if errors:
            return Return.err(validation_error(errors))

        async with self.uow:
            tenant = await self.tenants.resolve(actor.id, actor.role)
            if tenant.is_err():
                return tenant
            business_id = tenant.value

            if await self.uow.clients.get(business_id, client_id) is None:
                return Return.err(CLIENT_NOT_FOUND)

            if cleaner_id is not None and not await ensure_active_cleaner(
                self.uow, business_id, cleaner_id
            ):
                return Return.err(CLEANER_NOT_ON_ROSTER)

            template = dict(
                business_id=business_id,
                client_id=client_id,
                cleaner_id=cleaner_id,
                type=type,
                frequency=frequency if type == JobType.RECURRING else None,
                scheduled_time=scheduled_time,
                notes=notes,
                reminder_enabled=reminder_enabled,
                reminder_time=reminder_time or DEFAULT_REMINDER_TIME,
            )
            job = await self.uow.jobs.create(Job(scheduled_date=scheduled_date, **template))

            if checklist:
                await self.uow.jobs.add_checklist_items(
                    [JobChecklistItem(job_id=job.id, item_text=text) for text in checklist]
                )

            siblings = []
            if type == JobType.RECURRING:
                siblings = await self.uow.jobs.create_many(
                    [
                        Job(scheduled_date=date, **template)
                        for date in recurring_dates(scheduled_date, frequency)
                    ]
                )

            await track_job_usage(self.uow, business_id, now)

            views = await build_job_views(
                self.uow, business_id, [job], include_invoices=False
            )
            await self.uow.commit()

            logger.info(
                f"Job {job.id} created for business {business_id} "
                f"with {len(siblings)} recurring occurrences"
            )
            return Return.ok(CreateJobResponse(job=views[0], recurring_created=len(siblings)))
