"""Protocol definitions for dependency injection."""

from datetime import datetime
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

from .models import SyncInterval, Task


@runtime_checkable
class OptionStore(Protocol):
    """Protocol for a key-value blob store."""

    def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value or the default."""
        ...

    def set(self, key: str, value: Any) -> bool:
        """Store a value, return True if successful."""
        ...

    def delete(self, key: str) -> bool:
        """Remove a value, return True if it existed."""
        ...


@runtime_checkable
class TaskSource(Protocol):
    """Protocol for fetching tasks of a project."""

    async def fetch_all_tasks(self, project_id: str) -> Sequence[Task]:
        """Fetch every task of the project."""
        ...


@runtime_checkable
class Summarizer(Protocol):
    """Protocol for turning a prompt into a summary."""

    async def summarize(self, prompt: str) -> Optional[str]:
        """Return the summary, or None if unavailable."""
        ...


@runtime_checkable
class EmailSender(Protocol):
    """Protocol for sending notification emails."""

    async def send(self, email: str, subject: str, body: str) -> bool:
        """Send an email, return True if successful."""
        ...


@runtime_checkable
class TriggerScheduler(Protocol):
    """Protocol for the recurring-job primitive."""

    def register_periodic(
        self, name: str, interval: str, start: Optional[datetime] = None
    ) -> None:
        """Fire the named hook every interval."""
        ...

    def register_one_shot(self, name: str, when: Optional[datetime] = None) -> None:
        """Fire the named hook once."""
        ...

    def clear(self, name: str, include_one_shots: bool = True) -> None:
        """Remove the named hook's triggers, optionally keeping one-shot runs."""
        ...

    def is_scheduled(self, name: str, include_one_shots: bool = True) -> Optional[datetime]:
        """Next fire time of the named hook, or None."""
        ...

    def list_intervals(self) -> dict[str, SyncInterval]:
        """All known intervals by name."""
        ...

    def add_interval_provider(
        self, provider: Callable[[dict[str, SyncInterval]], dict[str, SyncInterval]]
    ) -> None:
        """Register a function that may add intervals to list_intervals()."""
        ...
