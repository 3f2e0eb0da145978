"""Notification sender implementations."""

from .email_sender import SmtpEmailSender, LogEmailSender

__all__ = [
    "SmtpEmailSender",
    "LogEmailSender",
]
