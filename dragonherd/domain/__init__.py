"""Domain models and protocols."""

from .models import (
    Task,
    ProjectConfig,
    SyncResult,
    SyncInterval,
    current_timestamp,
)
from .protocols import (
    OptionStore,
    TaskSource,
    Summarizer,
    EmailSender,
    TriggerScheduler,
)

__all__ = [
    "Task",
    "ProjectConfig",
    "SyncResult",
    "SyncInterval",
    "current_timestamp",
    "OptionStore",
    "TaskSource",
    "Summarizer",
    "EmailSender",
    "TriggerScheduler",
]
