"""Notification service for sync outcome emails."""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..domain.models import current_timestamp, format_local
from ..domain.protocols import EmailSender
from ..repositories.settings import DragonHerdSettings

logger = logging.getLogger(__name__)


class NotificationService:
    """Sends the success or failure email after a scheduled sync."""

    def __init__(
        self,
        settings: DragonHerdSettings,
        sender: EmailSender,
        *,
        site_name: str = "DragonHerd",
        admin_email: str = "",
        next_run_lookup: Optional[Callable[[], Optional[datetime]]] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings store (notification toggle and address)
            sender: Email sender
            site_name: Prefix for email subjects
            admin_email: Recipient when no notification email is configured
            next_run_lookup: Returns the next scheduled sync, for success emails
        """
        self._settings = settings
        self._sender = sender
        self._site_name = site_name
        self._admin_email = admin_email
        self._next_run_lookup = next_run_lookup

    def resolve_recipient(self) -> str:
        """Configured notification email, falling back to the admin email."""
        return self._settings.get_notification_email() or self._admin_email

    async def send_sync_notification(self, success: bool, error_message: str = "") -> bool:
        """Email the outcome of a sync if notifications are enabled.

        Returns:
            True if an email was handed to the sender successfully
        """
        if not self._settings.notifications_enabled():
            return False

        email = self.resolve_recipient()
        if not email:
            logger.debug("Notifications enabled but no recipient configured")
            return False

        if success:
            subject, body = self._build_success_message()
        else:
            subject, body = self._build_failure_message(error_message)

        sent = await self._sender.send(email, subject, body)
        if not sent:
            logger.warning(f"Sync notification to {email} was not delivered")
        return sent

    def _build_success_message(self) -> tuple[str, str]:
        subject = f"[{self._site_name}] DragonHerd Sync Completed Successfully"
        lines = [
            "The scheduled DragonHerd task synchronization completed successfully.",
            "",
            f"Sync completed at: {current_timestamp()}",
        ]
        next_run = self._next_run_lookup() if self._next_run_lookup else None
        if next_run:
            lines.append(f"Next sync: {format_local(next_run)}")
        return subject, "\n".join(lines) + "\n"

    def _build_failure_message(self, error_message: str) -> tuple[str, str]:
        subject = f"[{self._site_name}] DragonHerd Sync Failed"
        lines = [
            "The scheduled DragonHerd task synchronization failed.",
            "",
            f"Error: {error_message}",
            "",
            "Please check your API keys and settings.",
        ]
        return subject, "\n".join(lines) + "\n"
