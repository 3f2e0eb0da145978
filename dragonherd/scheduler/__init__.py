"""Scheduler module for background syncs."""

from .jobs import HookRegistry
from .scheduler import TriggerScheduler
from .sync_scheduler import SyncScheduler, SYNC_HOOK

__all__ = ["HookRegistry", "TriggerScheduler", "SyncScheduler", "SYNC_HOOK"]
