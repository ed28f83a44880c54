import asyncio
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from src.adapter.services.scheduler import PeriodicSweep, seconds_until_hour


def test_seconds_until_later_hour_today():
    assert seconds_until_hour(datetime(2024, 1, 1, 1, 30), 2) == 1800


def test_seconds_until_hour_rolls_to_tomorrow():
    assert seconds_until_hour(datetime(2024, 1, 1, 9, 0), 9) == 24 * 3600


def test_sweep_needs_exactly_one_schedule():
    with pytest.raises(ValueError):
        PeriodicSweep("broken", AsyncMock())
    with pytest.raises(ValueError):
        PeriodicSweep("broken", AsyncMock(), interval_seconds=60, daily_hour=2)


def test_interval_sweep_delay():
    sweep = PeriodicSweep("reminders", AsyncMock(), interval_seconds=3600)

    assert sweep.delay(datetime(2024, 1, 1)) == 3600.0


@pytest.mark.asyncio
async def test_overlapping_run_is_skipped():
    release = asyncio.Event()
    calls = []

    async def slow_sweep():
        calls.append("run")
        await release.wait()

    sweep = PeriodicSweep("renewal", slow_sweep, daily_hour=2)
    first = asyncio.create_task(sweep.run_once())
    await asyncio.sleep(0)

    assert await sweep.run_once() is False

    release.set()
    assert await first is True
    assert calls == ["run"]


@pytest.mark.asyncio
async def test_failing_sweep_does_not_raise():
    sweep = PeriodicSweep("payments", AsyncMock(side_effect=RuntimeError("boom")), daily_hour=9)

    assert await sweep.run_once() is True
    assert not sweep.lock.locked()
