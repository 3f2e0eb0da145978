"""In-memory option store for testing."""

import copy
from typing import Any


class InMemoryOptionStore:
    """In-memory implementation of OptionStore."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        """Get a copy of the stored value."""
        if key not in self._options:
            return default
        return copy.deepcopy(self._options[key])

    def set(self, key: str, value: Any) -> bool:
        """Store a copy of the value."""
        self._options[key] = copy.deepcopy(value)
        return True

    def delete(self, key: str) -> bool:
        """Remove a value."""
        if key in self._options:
            del self._options[key]
            return True
        return False
