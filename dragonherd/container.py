"""Dependency injection container."""

from dataclasses import dataclass
from typing import TypeVar, Generic, Callable, Optional, Any

from dragonherd.domain.protocols import EmailSender, OptionStore


T = TypeVar("T")


class Provider(Generic[T]):
    """Lazy provider that creates instance on first access."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._instance: Optional[T] = None

    def get(self) -> T:
        """Get the instance, creating it if necessary."""
        if self._instance is None:
            self._instance = self._factory()
        return self._instance

    def reset(self) -> None:
        """Reset the instance (for testing)."""
        self._instance = None

    def override(self, instance: T) -> None:
        """Override with a specific instance (for testing)."""
        self._instance = instance


@dataclass
class Container:
    """Dependency injection container."""

    _option_store: Optional[Provider[OptionStore]] = None
    _email_sender: Optional[Provider[EmailSender]] = None
    _trigger_scheduler: Optional[Provider[Any]] = None
    _sync_scheduler: Optional[Provider[Any]] = None
    _task_cache: Optional[Provider[Any]] = None

    # Settings cache
    _settings: Optional[Any] = None

    @property
    def settings(self) -> Any:
        """Get environment settings."""
        if self._settings is None:
            from dragonherd.config.settings import get_settings

            self._settings = get_settings()
        return self._settings

    @property
    def option_store(self) -> OptionStore:
        """Get the option store."""
        if self._option_store is None:
            raise RuntimeError("Option store not configured")
        return self._option_store.get()

    @property
    def dragonherd_settings(self) -> Any:
        """Get the user-editable settings store."""
        from dragonherd.repositories.settings import DragonHerdSettings

        return DragonHerdSettings(self.option_store)

    @property
    def history(self) -> Any:
        """Get the sync result history."""
        from dragonherd.repositories.history import SyncHistoryRepository

        return SyncHistoryRepository(self.option_store)

    @property
    def email_sender(self) -> EmailSender:
        """Get the email sender, SMTP if configured, otherwise the log sender."""
        if self._email_sender is None:
            self._email_sender = Provider(self._default_email_sender)
        return self._email_sender.get()

    def _default_email_sender(self) -> EmailSender:
        from dragonherd.notifications.email_sender import LogEmailSender, SmtpEmailSender

        smtp = self.settings.smtp
        if not smtp.is_configured:
            return LogEmailSender()
        return SmtpEmailSender(
            smtp.host,
            port=smtp.port,
            user=smtp.user,
            password=smtp.password.get_secret_value() if smtp.password else None,
            sender=smtp.sender,
            use_tls=smtp.use_tls,
        )

    @property
    def trigger_scheduler(self) -> Any:
        """Get the trigger scheduler."""
        if self._trigger_scheduler is None:
            raise RuntimeError("Trigger scheduler not configured")
        return self._trigger_scheduler.get()

    @property
    def notification_service(self) -> Any:
        """Get NotificationService instance."""
        from dragonherd.services.notification_service import NotificationService

        return NotificationService(
            self.dragonherd_settings,
            self.email_sender,
            site_name=self.settings.site_name,
            admin_email=self.settings.admin_email,
            next_run_lookup=lambda: self.sync_scheduler.get_next_sync_time(),
        )

    @property
    def sync_scheduler(self) -> Any:
        """Get the SyncScheduler (one per container)."""
        if self._sync_scheduler is None:
            self._sync_scheduler = Provider(self._default_sync_scheduler)
        return self._sync_scheduler.get()

    def _default_sync_scheduler(self) -> Any:
        from dragonherd.scheduler.sync_scheduler import SyncScheduler

        return SyncScheduler(
            settings=self.dragonherd_settings,
            triggers=self.trigger_scheduler,
            history=self.history,
            notifications=self.notification_service,
            orchestrator_factory=self.create_orchestrator,
        )

    def _build_task_client(self, bugherd_api_key: str) -> Any:
        from dragonherd.clients.bugherd import create_task_client

        bugherd = self.settings.bugherd
        return create_task_client(
            bugherd_api_key,
            base_url=bugherd.base_url,
            max_tasks=self.dragonherd_settings.get_max_tasks_per_sync(),
            timeout=bugherd.timeout,
        )

    def _build_summarizer(self, openai_api_key: str) -> Any:
        from dragonherd.clients.openai import create_summarizer

        openai = self.settings.openai
        return create_summarizer(
            openai_api_key,
            base_url=openai.base_url,
            model=openai.model,
            max_tokens=openai.max_tokens,
            timeout=openai.timeout,
        )

    def create_orchestrator(self, bugherd_api_key: str, openai_api_key: str) -> Any:
        """Build an orchestrator that always fetches fresh tasks."""
        from dragonherd.services.sync_service import SyncOrchestrator

        return SyncOrchestrator(
            self._build_task_client(bugherd_api_key),
            self._build_summarizer(openai_api_key),
            default_project_id=self.dragonherd_settings.get_default_project_id(),
        )

    def _cached_task_client(self, bugherd_api_key: str, ttl: int) -> Any:
        from dragonherd.clients.bugherd import CachedTaskClient

        if self._task_cache is None:
            self._task_cache = Provider(dict)
        caches = self._task_cache.get()

        # Any settings change starts with an empty cache
        key = (bugherd_api_key, ttl, self.dragonherd_settings.get_max_tasks_per_sync())
        if key not in caches:
            caches.clear()
            caches[key] = CachedTaskClient(self._build_task_client(bugherd_api_key), ttl)
        return caches[key]

    def on_demand_orchestrator(self) -> Any:
        """Build an orchestrator for on-demand requests, using the task cache."""
        from dragonherd.services.sync_service import SyncOrchestrator

        settings = self.dragonherd_settings
        return SyncOrchestrator(
            self._cached_task_client(
                settings.get_bugherd_api_key(), settings.get_cache_duration()
            ),
            self._build_summarizer(settings.get_openai_api_key()),
            default_project_id=settings.get_default_project_id(),
        )

    def configure_option_store(self, factory: Callable[[], OptionStore]) -> "Container":
        """Configure the option store."""
        self._option_store = Provider(factory)
        return self

    def configure_email_sender(self, factory: Callable[[], EmailSender]) -> "Container":
        """Configure the email sender."""
        self._email_sender = Provider(factory)
        return self

    def configure_trigger_scheduler(self, factory: Callable[[], Any]) -> "Container":
        """Configure the trigger scheduler."""
        self._trigger_scheduler = Provider(factory)
        return self

    def reset(self) -> None:
        """Reset all providers (for testing)."""
        for provider in (
            self._option_store,
            self._email_sender,
            self._trigger_scheduler,
            self._sync_scheduler,
            self._task_cache,
        ):
            if provider:
                provider.reset()
        self._settings = None


# Global container instance
container = Container()


def get_container() -> Container:
    """Get the global container instance."""
    return container


def reset_container() -> None:
    """Reset the global container (for testing)."""
    global container
    container.reset()
    container = Container()


def setup_container() -> Container:
    """Configure the global container from environment settings.

    Leaves an already configured container untouched.
    """
    from dragonherd.repositories.json_store import JsonFileOptionStore
    from dragonherd.scheduler.jobs import HookRegistry
    from dragonherd.scheduler.scheduler import TriggerScheduler

    container = get_container()

    if container._option_store is None:
        store_path = container.settings.store_path
        container.configure_option_store(lambda: JsonFileOptionStore(store_path))

    if container._trigger_scheduler is None:
        timezone = container.settings.scheduler.timezone
        container.configure_trigger_scheduler(
            lambda: TriggerScheduler(HookRegistry(), timezone=timezone)
        )

    return container
