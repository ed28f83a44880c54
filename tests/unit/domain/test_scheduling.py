from datetime import datetime, timedelta

import pytest

from src.domain.entities import JobFrequency, JobStatus, JobType
from src.domain.scheduling import (
    can_delete,
    can_transition,
    is_reminder_due,
    parse_reminder_time,
    recurring_dates,
    validate_schedule,
)


def test_weekly_series_has_twelve_following_dates():
    dates = recurring_dates(datetime(2024, 1, 1, 9, 0), JobFrequency.WEEKLY)

    assert len(dates) == 12
    assert dates[0] == datetime(2024, 1, 8, 9, 0)
    assert dates[-1] == datetime(2024, 3, 25, 9, 0)


def test_bi_weekly_series_steps_fourteen_days():
    dates = recurring_dates(datetime(2024, 1, 1), JobFrequency.BI_WEEKLY)

    assert dates[0] == datetime(2024, 1, 15)
    assert dates[1] - dates[0] == timedelta(days=14)


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        (JobStatus.SCHEDULED, JobStatus.IN_PROGRESS, True),
        (JobStatus.IN_PROGRESS, JobStatus.COMPLETED, True),
        (JobStatus.SCHEDULED, JobStatus.SCHEDULED, True),
        (JobStatus.SCHEDULED, JobStatus.COMPLETED, False),
        (JobStatus.COMPLETED, JobStatus.IN_PROGRESS, False),
        (JobStatus.IN_PROGRESS, JobStatus.SCHEDULED, False),
    ],
)
def test_status_moves_one_step_forward(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_only_scheduled_jobs_can_be_deleted():
    assert can_delete(JobStatus.SCHEDULED)
    assert not can_delete(JobStatus.IN_PROGRESS)
    assert not can_delete(JobStatus.COMPLETED)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("30 minutes", timedelta(minutes=30)),
        ("1 hour", timedelta(hours=1)),
        ("2 hours", timedelta(hours=2)),
        ("2 days", timedelta(days=2)),
        ("soon", timedelta(days=1)),
        (None, timedelta(days=1)),
    ],
)
def test_parse_reminder_time(value, expected):
    assert parse_reminder_time(value) == expected


def test_reminder_due_inside_window():
    job_at = datetime(2024, 6, 10, 10, 0)

    assert is_reminder_due(job_at, "1 day", datetime(2024, 6, 9, 9, 30))
    assert not is_reminder_due(job_at, "1 day", datetime(2024, 6, 9, 8, 30))


def test_reminder_not_sent_after_window_closes():
    job_at = datetime(2024, 6, 10, 10, 0)

    assert is_reminder_due(job_at, "1 day", datetime(2024, 6, 9, 10, 0))
    assert not is_reminder_due(job_at, "1 day", datetime(2024, 6, 9, 10, 1))
    assert not is_reminder_due(job_at, "1 day", datetime(2024, 6, 10, 7, 0))


def test_job_booked_inside_reminder_lead_time_gets_no_reminder():
    job_at = datetime(2024, 6, 10, 10, 0)

    assert not is_reminder_due(job_at, "1 day", job_at - timedelta(hours=3))


def test_validate_schedule_rejects_past_dates_and_missing_frequency():
    now = datetime(2024, 6, 10, 12, 0)

    errors = validate_schedule(JobType.RECURRING, None, datetime(2024, 6, 9), "1 week", now)

    assert set(errors) == {"scheduled_date", "frequency", "reminder_time"}


def test_validate_schedule_accepts_later_today():
    now = datetime(2024, 6, 10, 12, 0)

    assert validate_schedule(JobType.ONE_OFF, None, datetime(2024, 6, 10, 8, 0), None, now) == {}
