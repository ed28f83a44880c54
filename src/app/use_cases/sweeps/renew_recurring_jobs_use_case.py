import logging
from datetime import datetime, timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Job, JobStatus
from src.domain.scheduling import cadence

from .dtos import SweepReport

logger = logging.getLogger(__name__)

COMPLETED_WITHIN = timedelta(days=7)
DUPLICATE_TOLERANCE = timedelta(days=2)


class RenewRecurringJobsUseCase:
    """
    Daily sweep keeping recurring series going.

    Business Rules:
    - Looks at RECURRING jobs completed within the last 7 days
    - Next date is the job's date plus its cadence (7 or 14 days)
    - Skipped when the client already has a job within 2 days of that date
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[SweepReport]:
        now = now or utc_now()
        report = SweepReport()

        async with self.uow:
            completed = await self.uow.jobs.list_completed_recurring_since(now - COMPLETED_WITHIN)
            report.examined = len(completed)
            templates = [
                dict(
                    business_id=job.business_id,
                    client_id=job.client_id,
                    cleaner_id=job.cleaner_id,
                    type=job.type,
                    frequency=job.frequency,
                    scheduled_date=job.scheduled_date + cadence(job.frequency),
                    scheduled_time=job.scheduled_time,
                    reminder_enabled=job.reminder_enabled,
                    reminder_time=job.reminder_time,
                    source_id=job.id,
                )
                for job in completed
            ]

            for template in templates:
                source_id = template.pop("source_id")
                try:
                    next_date = template["scheduled_date"]
                    if await self.uow.jobs.exists_between(
                        template["business_id"],
                        template["client_id"],
                        next_date - DUPLICATE_TOLERANCE,
                        next_date + DUPLICATE_TOLERANCE,
                    ):
                        continue
                    job = await self.uow.jobs.create(Job(status=JobStatus.SCHEDULED, **template))
                    await self.uow.commit()
                    report.processed += 1
                    logger.info(
                        f"Created next occurrence {job.id} of recurring job {source_id} "
                        f"for {next_date.isoformat()}"
                    )
                except Exception:
                    report.failed += 1
                    logger.exception(f"Failed to renew recurring job {source_id}")
                    await self.uow.rollback()

        logger.info(f"Recurring renewal: {report.processed} of {report.examined} renewed")
        return Return.ok(report)
