"""
Update Job Use Case
"""

import logging
from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.common import FORBIDDEN, validation_error
from src.domain.actor import Actor
from src.domain.base import as_utc, utc_now
from src.domain.entities import JobStatus
from src.domain.permissions import Action, can
from src.domain.scheduling import can_transition, validate_schedule

from .create_job_use_case import CLEANER_NOT_ON_ROSTER, ensure_active_cleaner
from .dtos import JobResponse
from .views import build_job_views, load_visible_job

logger = logging.getLogger(__name__)

INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


class UpdateJobUseCase:
    """
    Use case for updating a job.

    Business Rules:
    - Cleaners may only change the status of jobs assigned to them;
      other fields they send are ignored
    - Status moves one step forward at a time; the same status is a no-op
    - cleaner_id of "" or None unassigns; otherwise the cleaner must be ACTIVE
      on the roster
    - Changing reminder_time, or re-enabling reminders, resets reminder_sent
    """

    def __init__(self, uow: UnitOfWork, tenants: TenantResolver):
        self.uow = uow
        self.tenants = tenants

    async def execute(
        self, actor: Actor, job_id: UUID, changes: Dict[str, Any]
    ) -> Result[JobResponse]:
        if not can(actor.role, Action.JOB_UPDATE_STATUS):
            return Return.err(FORBIDDEN)

        if not can(actor.role, Action.JOB_MANAGE):
            changes = {k: v for k, v in changes.items() if k == "status"}

        changes = dict(changes)
        if changes.get("scheduled_date") is not None:
            changes["scheduled_date"] = as_utc(changes["scheduled_date"])

        errors = validate_schedule(
            None, None, changes.get("scheduled_date"), changes.get("reminder_time"), utc_now()
        )
        if errors:
            return Return.err(validation_error(errors))

        async with self.uow:
            loaded = await load_visible_job(self.uow, self.tenants, actor, job_id)
            if loaded.is_err():
                return loaded
            job = loaded.value

            status = changes.get("status")
            if status is not None:
                status = JobStatus(status)
                if not can_transition(job.status, status):
                    return Return.err(
                        Error(
                            INVALID_STATUS_TRANSITION,
                            f"Cannot change status from {job.status.value} to {status.value}",
                        )
                    )
                job.status = status

            if "cleaner_id" in changes:
                cleaner_id = changes["cleaner_id"] or None
                if cleaner_id is not None:
                    try:
                        cleaner_id = UUID(str(cleaner_id))
                    except ValueError:
                        return Return.err(validation_error({"cleaner_id": ["Invalid cleaner id"]}))
                    if not await ensure_active_cleaner(self.uow, job.business_id, cleaner_id):
                        return Return.err(CLEANER_NOT_ON_ROSTER)
                job.cleaner_id = cleaner_id

            if changes.get("scheduled_date") is not None:
                job.scheduled_date = changes["scheduled_date"]
            if "scheduled_time" in changes:
                job.scheduled_time = changes["scheduled_time"]
            if "notes" in changes:
                job.notes = changes["notes"]

            if changes.get("reminder_enabled") is not None:
                job.reminder_enabled = changes["reminder_enabled"]
                if job.reminder_enabled:
                    job.reminder_sent = False
            if changes.get("reminder_time") is not None:
                job.reminder_time = changes["reminder_time"]
                job.reminder_sent = False

            job = await self.uow.jobs.update(job)
            views = await build_job_views(
                self.uow,
                job.business_id,
                [job],
                include_invoices=can(actor.role, Action.INVOICE_VIEW),
            )
            await self.uow.commit()

            logger.info(f"Job {job_id} updated by {actor.id}")
            return Return.ok(views[0])
