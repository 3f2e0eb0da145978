"""Email sender implementations."""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """Sends plain-text emails through an SMTP server."""

    def __init__(
        self,
        host: str,
        *,
        port: int = 587,
        user: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        """Initialize SMTP sender.

        Args:
            host: SMTP server host
            port: SMTP server port
            user: Login user, if the server requires authentication
            password: Login password
            sender: From address (defaults to user)
            use_tls: Upgrade the connection with STARTTLS
            timeout: Connection timeout in seconds
        """
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender = sender or user or f"dragonherd@{host}"
        self._use_tls = use_tls
        self._timeout = timeout

    def _build_message(self, email: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = email
        message["Subject"] = subject
        message.set_content(body)
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._use_tls:
                server.starttls()
            if self._user and self._password:
                server.login(self._user, self._password)
            server.send_message(message)

    async def send(self, email: str, subject: str, body: str) -> bool:
        """Send an email.

        Returns:
            True if the server accepted it, False otherwise
        """
        message = self._build_message(email, subject, body)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {email}: {e}")
            return False
        logger.info(f"Email sent to {email}: {subject}")
        return True


class LogEmailSender:
    """Writes emails to the log instead of sending them."""

    async def send(self, email: str, subject: str, body: str) -> bool:
        logger.info(f"SMTP not configured, email to {email} not sent: {subject}\n{body}")
        return False
