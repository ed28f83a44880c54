"""
Job scheduling rules: recurrence, status lifecycle and reminder timing.

Pure functions over plain values so they can be reused by request handlers and
background sweeps alike.
"""

import re
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from src.domain.entities.enums import JobFrequency, JobStatus, JobType

RECURRING_OCCURRENCES = 12
DEFAULT_REMINDER_TIME = "1 day"
VALID_REMINDER_TIMES = ("30 minutes", "1 hour", "2 hours", "1 day", "2 days")
REMINDER_WINDOW = timedelta(hours=1)

_CADENCE = {
    JobFrequency.WEEKLY: timedelta(weeks=1),
    JobFrequency.BI_WEEKLY: timedelta(weeks=2),
}

_NEXT_STATUS = {
    JobStatus.SCHEDULED: JobStatus.IN_PROGRESS,
    JobStatus.IN_PROGRESS: JobStatus.COMPLETED,
}

_REMINDER_PATTERN = re.compile(r"^\s*(\d+)\s*(minute|hour|day)s?\s*$", re.IGNORECASE)
_REMINDER_UNITS = {"minute": "minutes", "hour": "hours", "day": "days"}


def cadence(frequency: JobFrequency) -> timedelta:
    return _CADENCE[JobFrequency(frequency)]


def recurring_dates(
    start: datetime, frequency: JobFrequency, count: int = RECURRING_OCCURRENCES
) -> List[datetime]:
    """Dates of the sibling occurrences that follow ``start`` (start excluded)"""
    step = cadence(frequency)
    return [start + step * n for n in range(1, count + 1)]


def can_transition(current: JobStatus, target: JobStatus) -> bool:
    """Single forward step, or staying put"""
    current, target = JobStatus(current), JobStatus(target)
    return target == current or _NEXT_STATUS.get(current) == target


def can_delete(status: JobStatus) -> bool:
    return JobStatus(status) == JobStatus.SCHEDULED


def is_valid_reminder_time(value: str) -> bool:
    return value in VALID_REMINDER_TIMES


def parse_reminder_time(value: Optional[str]) -> timedelta:
    """Turn "30 minutes" / "2 hours" / "1 day" into a timedelta, defaulting to one day"""
    match = _REMINDER_PATTERN.match(value or "")
    if match is None:
        return timedelta(days=1)
    amount, unit = int(match.group(1)), match.group(2).lower()
    return timedelta(**{_REMINDER_UNITS[unit]: amount})


def is_reminder_due(scheduled_date: datetime, reminder_time: str, now: datetime) -> bool:
    """
    Due during the hour-long window ending at ``scheduled_date - reminder_time``.

    The hourly sweep lands in each window once; the reminder_sent latch stops a
    second send when two runs fall inside the same window.
    """
    remind_at = scheduled_date - parse_reminder_time(reminder_time)
    return remind_at - REMINDER_WINDOW <= now <= remind_at


def validate_schedule(
    job_type: Optional[JobType],
    frequency: Optional[JobFrequency],
    scheduled_date: Optional[datetime],
    reminder_time: Optional[str],
    now: datetime,
) -> Dict[str, List[str]]:
    """Field -> messages map; empty when the schedule is acceptable"""
    errors: Dict[str, List[str]] = {}

    if scheduled_date is not None and scheduled_date.date() < now.date():
        errors.setdefault("scheduled_date", []).append(
            "Scheduled date cannot be in the past"
        )

    if job_type == JobType.RECURRING and frequency is None:
        errors.setdefault("frequency", []).append(
            "Frequency is required for recurring jobs"
        )

    if reminder_time is not None and not is_valid_reminder_time(reminder_time):
        errors.setdefault("reminder_time", []).append(
            f"Reminder time must be one of: {', '.join(VALID_REMINDER_TIMES)}"
        )

    return errors
