"""Domain models for the task summarizer."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Optional


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def current_timestamp() -> str:
    """Current local time in the format stored alongside results."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def format_local(moment: datetime) -> str:
    """Format a datetime in local time, matching current_timestamp().

    Naive datetimes are taken to be local already.
    """
    return moment.astimezone().strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class Task:
    """A task fetched from the issue tracker."""

    id: int
    description: Optional[str] = None
    status: Optional[str] = None
    assignee_ids: tuple[int, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Task":
        """Build a Task from a tracker API task object."""
        return cls(
            id=int(data.get("id") or 0),
            description=data.get("description"),
            status=data.get("status"),
            assignee_ids=tuple(int(i) for i in data.get("assignee_ids") or ()),
        )


@dataclass
class ProjectConfig:
    """A project configured for scheduled syncs."""

    id: str
    name: str
    description: str = ""
    active: bool = True
    created_at: str = field(default_factory=current_timestamp)
    updated_at: str = field(default_factory=current_timestamp)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectConfig":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            description=str(data.get("description") or ""),
            active=bool(data.get("active", True)),
            created_at=data.get("created_at") or current_timestamp(),
            updated_at=data.get("updated_at") or current_timestamp(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SyncResult:
    """One stored summary for a project."""

    summary: str
    timestamp: str = field(default_factory=current_timestamp)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncResult":
        return cls(summary=data.get("summary", ""), timestamp=data.get("timestamp", ""))

    def to_dict(self) -> dict[str, str]:
        return {"summary": self.summary, "timestamp": self.timestamp}


@dataclass(frozen=True)
class SyncInterval:
    """A named recurrence the scheduler can run at."""

    name: str
    seconds: int
    display: str
