"""Bounded per-project history of sync results."""

from ..domain.models import SyncResult
from ..domain.protocols import OptionStore


class SyncHistoryRepository:
    """Stores the most recent sync results of each project."""

    OPTION_NAME = "dragonherd_sync_results"
    MAX_ENTRIES = 10

    def __init__(self, store: OptionStore, max_entries: int = MAX_ENTRIES) -> None:
        self._store = store
        self._max_entries = max_entries

    def _load(self) -> dict[str, list[dict]]:
        data = self._store.get(self.OPTION_NAME, {}) or {}
        # Older blobs kept a single result per project
        return {
            project_id: entries if isinstance(entries, list) else [entries]
            for project_id, entries in data.items()
        }

    def append(self, project_id: str, result: SyncResult) -> list[SyncResult]:
        """Append a result and evict the oldest beyond the cap.

        Returns:
            The project's history after the write, oldest first
        """
        data = self._load()
        entries = data.get(project_id, [])
        entries.append(result.to_dict())
        data[project_id] = entries[-self._max_entries:]
        self._store.set(self.OPTION_NAME, data)
        return [SyncResult.from_dict(e) for e in data[project_id]]

    def get(self, project_id: str) -> list[SyncResult]:
        """History of one project, oldest first."""
        return [SyncResult.from_dict(e) for e in self._load().get(project_id, [])]

    def get_all(self) -> dict[str, list[SyncResult]]:
        """History of every project."""
        return {
            project_id: [SyncResult.from_dict(e) for e in entries]
            for project_id, entries in self._load().items()
        }

    def clear(self) -> bool:
        """Delete all stored history."""
        return self._store.delete(self.OPTION_NAME)
