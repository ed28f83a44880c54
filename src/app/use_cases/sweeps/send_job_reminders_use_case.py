"""
Send Job Reminders Use Case

Hourly sweep emailing the owner, the assigned cleaner and the client about
upcoming jobs.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.errors import ProviderError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.scheduling import is_reminder_due

from .dtos import SweepReport

logger = logging.getLogger(__name__)


@dataclass
class _Reminder:
    job_id: UUID
    business_id: UUID
    scheduled_date: datetime
    scheduled_time: Optional[str]
    client_name: str
    client_address: Optional[str]
    client_phone: Optional[str]
    recipients: List[str]
    client_email: Optional[str]


def client_email_of(client) -> Optional[str]:
    """Client email, falling back to an email kept in the notes object"""
    if client.email:
        return client.email
    if isinstance(client.notes, dict) and client.notes.get("email"):
        return client.notes["email"]
    return None


class SendJobRemindersUseCase:
    """
    Use case for the job reminder sweep.

    Business Rules:
    - Only SCHEDULED jobs with reminders enabled and not yet sent
    - Due only while now is within the hour ending at scheduled_date - reminder_time
    - reminder_sent is set after sending, so each job is reminded once
    - Failures are logged per job and never stop the sweep
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, now: Optional[datetime] = None) -> Result[SweepReport]:
        now = now or utc_now()
        report = SweepReport()

        async with self.uow:
            candidates = await self.uow.jobs.list_pending_reminders(now)
            report.examined = len(candidates)
            due = [
                job
                for job in candidates
                if is_reminder_due(job.scheduled_date, job.reminder_time, now)
            ]
            reminders = [await self._collect(job) for job in due]

            for reminder in reminders:
                try:
                    await self._send(reminder)
                    job = await self.uow.jobs.get(reminder.business_id, reminder.job_id)
                    job.reminder_sent = True
                    await self.uow.jobs.update(job)
                    await self.uow.commit()
                    report.processed += 1
                    logger.info(f"Sent reminder for job {reminder.job_id}")
                except Exception:
                    report.failed += 1
                    logger.exception(f"Failed to process reminder for job {reminder.job_id}")
                    await self.uow.rollback()

        logger.info(
            f"Job reminders: {report.examined} checked, {report.processed} sent, "
            f"{report.failed} failed"
        )
        return Return.ok(report)

    async def _collect(self, job) -> _Reminder:
        client = await self.uow.clients.get(job.business_id, job.client_id)
        business = await self.uow.businesses.get_by_id(job.business_id)
        owner = await self.uow.users.get_by_id(business.user_id) if business else None
        cleaner = await self.uow.users.get_by_id(job.cleaner_id) if job.cleaner_id else None
        return _Reminder(
            job_id=job.id,
            business_id=job.business_id,
            scheduled_date=job.scheduled_date,
            scheduled_time=job.scheduled_time,
            client_name=client.name if client else "your client",
            client_address=client.address if client else None,
            client_phone=client.phone if client else None,
            recipients=[u.email for u in (owner, cleaner) if u is not None],
            client_email=client_email_of(client) if client else None,
        )

    async def _send(self, reminder: _Reminder) -> None:
        when = reminder.scheduled_date.strftime("%A, %d %B %Y")
        time = reminder.scheduled_time or "Time TBD"
        details = [f"Client: {reminder.client_name}", f"Date: {when}", f"Time: {time}"]
        if reminder.client_address:
            details.append(f"Address: {reminder.client_address}")
        if reminder.client_phone:
            details.append(f"Phone: {reminder.client_phone}")

        for address in reminder.recipients:
            await self._deliver(
                address,
                f"Reminder: Job scheduled for {reminder.client_name} on {when}",
                "Upcoming job scheduled",
                details,
            )
        if reminder.client_email:
            await self._deliver(
                reminder.client_email,
                f"Reminder: Cleaning appointment on {when}",
                "Your cleaning appointment is coming up",
                [f"Date: {when}", f"Time: {time}"],
            )

    async def _deliver(self, to: str, subject: str, heading: str, lines: List[str]) -> None:
        try:
            await self.email_sender.send(
                to=to,
                subject=subject,
                html=f"<h2>{heading}</h2>" + "".join(f"<p>{line}</p>" for line in lines),
                text="\n".join([heading] + lines),
            )
        except ProviderError as exc:
            logger.error(f"Reminder email to {to} failed: {exc}")
