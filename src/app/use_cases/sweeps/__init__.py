"""
Background sweep use cases
"""

from .dtos import SweepReport
from .renew_recurring_jobs_use_case import RenewRecurringJobsUseCase
from .send_job_reminders_use_case import SendJobRemindersUseCase
from .send_payment_reminders_use_case import SendPaymentRemindersUseCase

__all__ = [
    "SendJobRemindersUseCase",
    "RenewRecurringJobsUseCase",
    "SendPaymentRemindersUseCase",
    "SweepReport",
]
