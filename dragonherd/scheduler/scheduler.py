"""Trigger scheduler using APScheduler."""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from ..domain.models import SyncInterval
from .jobs import HookRegistry

logger = logging.getLogger(__name__)


IntervalProvider = Callable[[dict[str, SyncInterval]], dict[str, SyncInterval]]

BASE_INTERVALS: dict[str, SyncInterval] = {
    "hourly": SyncInterval("hourly", 3600, "Once Hourly"),
    "twicedaily": SyncInterval("twicedaily", 12 * 3600, "Twice Daily"),
    "daily": SyncInterval("daily", 24 * 3600, "Once Daily"),
    "weekly": SyncInterval("weekly", 7 * 24 * 3600, "Once Weekly"),
}

# Separates the hook name from the unique suffix of one-shot job IDs
ONE_SHOT_SEPARATOR = "@"


class TriggerScheduler:
    """Fires named hooks periodically or once."""

    def __init__(
        self,
        hooks: HookRegistry,
        timezone: str = "UTC",
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        """Initialize scheduler.

        Args:
            hooks: Registry the fired hook names are looked up in
            timezone: Timezone for triggers
            scheduler: Optional APScheduler instance for testing
        """
        self._hooks = hooks
        self._tz = ZoneInfo(timezone)
        self._scheduler = scheduler
        self._running = False
        self._interval_providers: list[IntervalProvider] = []

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._running

    @property
    def hooks(self) -> HookRegistry:
        """Get the hook registry."""
        return self._hooks

    def _get_scheduler(self) -> AsyncIOScheduler:
        if self._scheduler is None:
            self._scheduler = AsyncIOScheduler(timezone=self._tz)
        return self._scheduler

    def start(self) -> None:
        """Start firing triggers. Must be called with an event loop running."""
        if self._running:
            logger.warning("Scheduler already running")
            return

        self._get_scheduler().start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        """Stop the scheduler."""
        if not self._running or not self._scheduler:
            return

        self._scheduler.shutdown(wait=False)
        self._running = False
        logger.info("Scheduler stopped")

    def add_interval_provider(self, provider: IntervalProvider) -> None:
        """Register a function that may add intervals to list_intervals()."""
        self._interval_providers.append(provider)

    def list_intervals(self) -> dict[str, SyncInterval]:
        """All known intervals by name."""
        intervals = dict(BASE_INTERVALS)
        for provider in self._interval_providers:
            intervals = provider(intervals)
        return intervals

    def _make_runner(self, name: str) -> Callable[[], Any]:
        async def run_hook():
            """Wrapper to log hook execution."""
            try:
                result = await self._hooks.run(name)
                logger.info(f"Hook {name} completed")
                return result
            except Exception as e:
                logger.error(f"Hook {name} failed: {e}")
                raise

        return run_hook

    def register_periodic(
        self, name: str, interval: str, start: Optional[datetime] = None
    ) -> None:
        """Fire the named hook every interval, starting at start (default now).

        Raises:
            ValueError: If the interval name is unknown
        """
        sync_interval = self.list_intervals().get(interval)
        if sync_interval is None:
            raise ValueError(f"Unknown interval: {interval}")

        trigger = IntervalTrigger(
            seconds=sync_interval.seconds,
            start_date=start or datetime.now(self._tz),
            timezone=self._tz,
        )
        self._get_scheduler().add_job(
            self._make_runner(name),
            trigger=trigger,
            id=name,
            name=name,
            replace_existing=True,
        )
        logger.debug(f"Scheduled hook {name} every {sync_interval.seconds}s ({interval})")

    def register_one_shot(self, name: str, when: Optional[datetime] = None) -> None:
        """Fire the named hook once at when (default now)."""
        job_id = f"{name}{ONE_SHOT_SEPARATOR}{uuid.uuid4().hex}"
        self._get_scheduler().add_job(
            self._make_runner(name),
            trigger=DateTrigger(run_date=when or datetime.now(self._tz), timezone=self._tz),
            id=job_id,
            name=name,
        )
        logger.debug(f"Scheduled one-shot run of hook {name}")

    def _jobs_for(self, name: str, include_one_shots: bool = True) -> list:
        prefix = f"{name}{ONE_SHOT_SEPARATOR}"
        return [
            job
            for job in self._get_scheduler().get_jobs()
            if job.id == name or (include_one_shots and job.id.startswith(prefix))
        ]

    def clear(self, name: str, include_one_shots: bool = True) -> None:
        """Remove the triggers of the named hook.

        Args:
            name: Hook name
            include_one_shots: Also remove queued one-shot runs, not only
                the periodic trigger
        """
        for job in self._jobs_for(name, include_one_shots):
            self._get_scheduler().remove_job(job.id)
            logger.debug(f"Removed job {job.id}")

    def _next_fire_time(self, job) -> Optional[datetime]:
        # Jobs added before start() have no next_run_time yet
        if getattr(job, "pending", False):
            return job.trigger.get_next_fire_time(None, datetime.now(self._tz))
        return getattr(job, "next_run_time", None)

    def is_scheduled(self, name: str, include_one_shots: bool = True) -> Optional[datetime]:
        """Earliest next fire time of the named hook, or None.

        With include_one_shots=False only the periodic trigger is considered.
        """
        jobs = self._jobs_for(name, include_one_shots)
        times = [t for t in (self._next_fire_time(job) for job in jobs) if t]
        return min(times) if times else None
