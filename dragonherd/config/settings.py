"""Application settings using Pydantic."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BugherdSettings(BaseSettings):
    """BugHerd API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BUGHERD_",
        extra="ignore",
    )

    base_url: str = Field(default="https://www.bugherd.com/api_v2")
    timeout: float = Field(default=30.0)


class OpenAISettings(BaseSettings):
    """Chat completion API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENAI_",
        extra="ignore",
    )

    base_url: str = Field(default="https://api.openai.com/v1")
    model: str = Field(default="gpt-3.5-turbo")
    max_tokens: int = Field(default=500)
    timeout: float = Field(default=60.0)


class SmtpSettings(BaseSettings):
    """SMTP configuration for sync notification emails."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SMTP_",
        extra="ignore",
    )

    host: Optional[str] = Field(default=None)
    port: int = Field(default=587)
    user: Optional[str] = Field(default=None)
    password: Optional[SecretStr] = Field(default=None)
    sender: Optional[str] = Field(default=None)
    use_tls: bool = Field(default=True)

    @property
    def is_configured(self) -> bool:
        """Whether enough is set to actually deliver mail."""
        return bool(self.host)


class SchedulerSettings(BaseSettings):
    """Scheduler configuration."""

    model_config = SettingsConfigDict(env_prefix="SCHEDULER_", extra="ignore")

    enabled: bool = Field(default=True)
    timezone: str = Field(default="UTC")


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DRAGONHERD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Where the option blobs (settings, sync results) are kept
    store_path: str = Field(default="dragonherd.json")
    site_name: str = Field(default="DragonHerd")
    admin_email: str = Field(default="")

    # Nested settings - manually create to avoid env prefix issues
    @property
    def bugherd(self) -> BugherdSettings:
        return BugherdSettings()

    @property
    def openai(self) -> OpenAISettings:
        return OpenAISettings()

    @property
    def smtp(self) -> SmtpSettings:
        return SmtpSettings()

    @property
    def scheduler(self) -> SchedulerSettings:
        return SchedulerSettings()


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
