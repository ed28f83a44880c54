"""
In-process scheduler for background sweeps.

Each sweep runs in its own asyncio task. A run that is still in progress when
the next one comes due is skipped, never queued.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, List, Optional, Set

from src.domain.base import utc_now

logger = logging.getLogger(__name__)

SweepRunner = Callable[[], Awaitable[object]]


def seconds_until_hour(now: datetime, hour: int) -> float:
    """Seconds from now until the next HH:00:00 (UTC)"""
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class PeriodicSweep:
    """A named sweep running every interval_seconds, or daily at daily_hour"""

    def __init__(
        self,
        name: str,
        run: SweepRunner,
        interval_seconds: Optional[int] = None,
        daily_hour: Optional[int] = None,
    ):
        if (interval_seconds is None) == (daily_hour is None):
            raise ValueError("Provide exactly one of interval_seconds or daily_hour")
        self.name = name
        self.run = run
        self.interval_seconds = interval_seconds
        self.daily_hour = daily_hour
        self.lock = asyncio.Lock()

    def delay(self, now: datetime) -> float:
        if self.interval_seconds is not None:
            return float(self.interval_seconds)
        return seconds_until_hour(now, self.daily_hour)

    async def run_once(self) -> bool:
        """Run the sweep unless a previous run holds the lock; True if it ran"""
        if self.lock.locked():
            logger.warning(f"Skipping sweep {self.name}: previous run still in progress")
            return False

        async with self.lock:
            logger.info(f"Starting sweep {self.name}")
            try:
                await self.run()
            except Exception:
                logger.exception(f"Sweep {self.name} failed")
            else:
                logger.info(f"Finished sweep {self.name}")
        return True


class SweepScheduler:
    def __init__(self, sweeps: List[PeriodicSweep]):
        self.sweeps = sweeps
        self._tasks: List[asyncio.Task] = []
        self._runs: Set[asyncio.Task] = set()

    def start(self) -> None:
        for sweep in self.sweeps:
            self._tasks.append(asyncio.create_task(self._loop(sweep), name=f"sweep:{sweep.name}"))
        logger.info(f"Scheduler started with {len(self.sweeps)} sweeps")

    async def stop(self) -> None:
        pending = self._tasks + list(self._runs)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._tasks = []
        self._runs.clear()
        logger.info("Scheduler stopped")

    async def _loop(self, sweep: PeriodicSweep) -> None:
        while True:
            await asyncio.sleep(sweep.delay(utc_now()))
            run = asyncio.create_task(sweep.run_once())
            self._runs.add(run)
            run.add_done_callback(self._runs.discard)
