"""Repository implementations."""

from .memory import InMemoryOptionStore
from .json_store import JsonFileOptionStore
from .settings import DragonHerdSettings
from .history import SyncHistoryRepository

__all__ = [
    "InMemoryOptionStore",
    "JsonFileOptionStore",
    "DragonHerdSettings",
    "SyncHistoryRepository",
]
