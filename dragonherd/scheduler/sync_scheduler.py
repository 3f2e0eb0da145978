"""Recurring sync of configured projects."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..domain.models import SyncInterval, SyncResult, current_timestamp, format_local
from ..domain.protocols import TriggerScheduler
from ..repositories.history import SyncHistoryRepository
from ..repositories.settings import DragonHerdSettings
from ..services.notification_service import NotificationService
from ..services.sync_service import SyncOrchestrator
from .jobs import HookRegistry

logger = logging.getLogger(__name__)


SYNC_HOOK = "dragonherd_sync_tasks"

CUSTOM_INTERVALS: tuple[SyncInterval, ...] = (
    SyncInterval("fifteen_minutes", 15 * 60, "Every 15 Minutes"),
    SyncInterval("thirty_minutes", 30 * 60, "Every 30 Minutes"),
)

# (bugherd_api_key, openai_api_key) -> orchestrator
OrchestratorFactory = Callable[[str, str], SyncOrchestrator]


class SyncScheduler:
    """Schedules and runs the summary sync of every configured project."""

    def __init__(
        self,
        settings: DragonHerdSettings,
        triggers: TriggerScheduler,
        history: SyncHistoryRepository,
        notifications: NotificationService,
        orchestrator_factory: OrchestratorFactory,
    ):
        """Initialize sync scheduler.

        Args:
            settings: Settings store
            triggers: Trigger primitive the sync hook is registered with
            history: Per-project result history
            notifications: Sends the outcome email
            orchestrator_factory: Builds an orchestrator from both API keys
        """
        self._settings = settings
        self._triggers = triggers
        self._history = history
        self._notifications = notifications
        self._orchestrator_factory = orchestrator_factory
        self._lock = asyncio.Lock()

    def init(self, hooks: HookRegistry) -> None:
        """Bind run_sync to the sync hook and contribute custom intervals."""
        hooks.register(SYNC_HOOK, self.run_sync, description="Sync and summarize projects")
        self._triggers.add_interval_provider(self.add_custom_intervals)

    def setup_schedules(self) -> None:
        """(Re)register the periodic sync according to the configured schedule."""
        schedule = self._settings.get_sync_schedule()

        # Queued manual runs are left alone
        if self._triggers.is_scheduled(SYNC_HOOK, include_one_shots=False):
            self._triggers.clear(SYNC_HOOK, include_one_shots=False)

        if schedule == "disabled":
            logger.info("Scheduled sync disabled")
            return

        if not self._triggers.is_scheduled(SYNC_HOOK, include_one_shots=False):
            try:
                self._triggers.register_periodic(SYNC_HOOK, schedule)
            except ValueError as e:
                logger.error(f"Cannot schedule sync: {e}")
                return
            logger.info(f"Scheduled sync {schedule}")

    @staticmethod
    def add_custom_intervals(intervals: dict[str, SyncInterval]) -> dict[str, SyncInterval]:
        """Add the 15 and 30 minute intervals unless already present."""
        for interval in CUSTOM_INTERVALS:
            intervals.setdefault(interval.name, interval)
        return intervals

    def get_target_project_ids(self) -> list[str]:
        """Active configured projects, or the default project if none are configured."""
        projects = self._settings.get_projects()
        default_project_id = self._settings.get_default_project_id()

        if not projects and default_project_id:
            return [default_project_id]
        return [project.id for project in projects.values() if project.active]

    async def run_sync(self) -> None:
        """Sync every target project; never raises.

        Runs that start while another is in progress are skipped.
        """
        if self._lock.locked():
            logger.warning("Sync already in progress, skipping this run")
            return

        async with self._lock:
            try:
                bugherd_api_key = self._settings.get_bugherd_api_key()
                if not bugherd_api_key:
                    logger.error("BugHerd API key not configured for scheduled sync")
                    return

                orchestrator = self._orchestrator_factory(
                    bugherd_api_key, self._settings.get_openai_api_key()
                )

                for project_id in self.get_target_project_ids():
                    await self.sync_project(orchestrator, project_id)

                self._settings.set("last_sync_time", current_timestamp())
                await self._notify(True)

            except Exception as e:
                logger.exception(f"Scheduled sync error: {e}")
                await self._notify(False, str(e))

    async def sync_project(self, orchestrator: SyncOrchestrator, project_id: str) -> SyncResult:
        """Summarize one project and append the result to its history."""
        summary = await orchestrator.run_filtered(project_id)
        result = SyncResult(summary=summary)
        self._history.append(project_id, result)

        if self._settings.is_debug_mode():
            logger.info(f"Synced project {project_id} - {summary}")

        return result

    async def _notify(self, success: bool, error_message: str = "") -> None:
        try:
            await self._notifications.send_sync_notification(success, error_message)
        except Exception as e:
            logger.error(f"Failed to send sync notification: {e}")

    def get_next_sync_time(self) -> Optional[datetime]:
        """Next run of the sync hook, periodic or queued manual run."""
        return self._triggers.is_scheduled(SYNC_HOOK)

    def is_periodic_sync_scheduled(self) -> bool:
        return self._triggers.is_scheduled(SYNC_HOOK, include_one_shots=False) is not None

    def get_last_sync_time(self) -> Optional[str]:
        return self._settings.get("last_sync_time", None)

    def trigger_manual_sync(self) -> bool:
        """Queue an immediate sync. Reports the queuing, not the outcome."""
        self._triggers.register_one_shot(SYNC_HOOK)
        return True

    def get_schedule_display(self, schedule: str) -> str:
        options = self._settings.get_sync_schedule_options()
        if schedule in options:
            return options[schedule]
        interval = self._triggers.list_intervals().get(schedule)
        return interval.display if interval else "Unknown"

    def get_sync_status(self) -> dict[str, Any]:
        """Schedule, run times and stored results."""
        next_sync = self.get_next_sync_time()
        schedule = self._settings.get_sync_schedule()

        return {
            "schedule": schedule,
            "last_sync": self.get_last_sync_time(),
            "next_sync": format_local(next_sync) if next_sync else None,
            "is_scheduled": self.is_periodic_sync_scheduled(),
            "schedule_display": self.get_schedule_display(schedule),
            "sync_results": {
                project_id: [r.to_dict() for r in results]
                for project_id, results in self._history.get_all().items()
            },
        }

    def clear_all_schedules(self) -> None:
        """Remove the sync trigger, stored results and last sync time."""
        self._triggers.clear(SYNC_HOOK)
        self._history.clear()
        self._settings.set("last_sync_time", None)
