"""Configuration module."""

from .settings import (
    AppSettings,
    BugherdSettings,
    OpenAISettings,
    SmtpSettings,
    SchedulerSettings,
    get_settings,
)
from .logging import configure_logging

__all__ = [
    "AppSettings",
    "BugherdSettings",
    "OpenAISettings",
    "SmtpSettings",
    "SchedulerSettings",
    "get_settings",
    "configure_logging",
]
