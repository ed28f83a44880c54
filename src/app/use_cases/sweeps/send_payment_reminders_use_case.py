import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now

from .dtos import SweepReport
from .send_job_reminders_use_case import client_email_of

logger = logging.getLogger(__name__)

REMINDER_HORIZON = timedelta(days=3)


class SendPaymentRemindersUseCase:
    """
    Daily sweep emailing clients about UNPAID invoices due within 3 days.

    Clients without an email address are skipped.
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, now: Optional[datetime] = None) -> Result[SweepReport]:
        now = now or utc_now()
        report = SweepReport()

        async with self.uow:
            invoices = await self.uow.invoices.list_unpaid_due_between(now, now + REMINDER_HORIZON)
            report.examined = len(invoices)

            for invoice in invoices:
                try:
                    client = await self.uow.clients.get(invoice.business_id, invoice.client_id)
                    business = await self.uow.businesses.get_by_id(invoice.business_id)
                    address = client_email_of(client) if client else None
                    if not address:
                        continue

                    days = math.ceil((invoice.due_date - now).total_seconds() / 86400)
                    subject = (
                        f"Payment Reminder: Invoice {invoice.invoice_number} "
                        f"Due in {days} day{'' if days == 1 else 's'}"
                    )
                    lines = [
                        f"Hello {client.name},",
                        f"Invoice {invoice.invoice_number} from {business.name} "
                        f"for £{invoice.total_amount:.2f} is due on "
                        f"{invoice.due_date.strftime('%d %B %Y')}.",
                        "Please arrange payment at your earliest convenience.",
                    ]
                    await self.email_sender.send(
                        to=address,
                        subject=subject,
                        html="".join(f"<p>{line}</p>" for line in lines),
                        text="\n".join(lines),
                    )
                    report.processed += 1
                    logger.info(f"Sent payment reminder for invoice {invoice.invoice_number}")
                except Exception:
                    report.failed += 1
                    logger.exception(f"Failed to send payment reminder for invoice {invoice.id}")

        logger.info(
            f"Payment reminders: {report.processed} of {report.examined} sent, "
            f"{report.failed} failed"
        )
        return Return.ok(report)
