"""Service layer implementations."""

from .task_filter import apply_filters, by_assignee, by_keyword, by_status
from .prompt_composer import PromptComposer
from .sync_service import SyncOrchestrator, SUMMARY_UNAVAILABLE
from .notification_service import NotificationService

__all__ = [
    "apply_filters",
    "by_assignee",
    "by_keyword",
    "by_status",
    "PromptComposer",
    "SyncOrchestrator",
    "SUMMARY_UNAVAILABLE",
    "NotificationService",
]
