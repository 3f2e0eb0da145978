"""JSON file backed option store."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonFileOptionStore:
    """Keeps every option in one JSON document on disk.

    Each write reads the whole document, replaces one key and writes the
    whole document back (last writer wins).
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize store.

        Args:
            path: JSON file to read and write; created on first write
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers invalid JSON and invalid UTF-8
            logger.error(f"Option store {self._path} could not be read: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value or the default."""
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Store a value."""
        data = self._load()
        data[key] = value
        try:
            self._save(data)
        except OSError as e:
            logger.error(f"Failed to write option {key}: {e}")
            return False
        return True

    def delete(self, key: str) -> bool:
        """Remove a value."""
        data = self._load()
        if key not in data:
            return False
        del data[key]
        try:
            self._save(data)
        except OSError as e:
            logger.error(f"Failed to delete option {key}: {e}")
            return False
        return True
