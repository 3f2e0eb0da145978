"""Tests for option store implementations."""

import json

import pytest

from dragonherd.repositories.json_store import JsonFileOptionStore
from dragonherd.repositories.memory import InMemoryOptionStore


class TestInMemoryOptionStore:
    """Tests for InMemoryOptionStore."""

    def test_get_default(self):
        """Should return default for missing keys."""
        store = InMemoryOptionStore()
        assert store.get("missing") is None
        assert store.get("missing", {}) == {}

    def test_set_and_get(self):
        """Should store and return values."""
        store = InMemoryOptionStore()
        assert store.set("key", {"a": 1}) is True
        assert store.get("key") == {"a": 1}

    def test_returns_copies(self):
        """Should not let callers mutate stored values."""
        store = InMemoryOptionStore({"key": {"a": [1]}})

        value = store.get("key")
        value["a"].append(2)

        assert store.get("key") == {"a": [1]}

    def test_delete(self):
        """Should delete existing keys only."""
        store = InMemoryOptionStore({"key": 1})
        assert store.delete("key") is True
        assert store.delete("key") is False


class TestJsonFileOptionStore:
    """Tests for JsonFileOptionStore."""

    @pytest.fixture
    def path(self, tmp_path):
        return tmp_path / "store" / "options.json"

    def test_missing_file(self, path):
        """Should behave as an empty store before the first write."""
        store = JsonFileOptionStore(path)
        assert store.get("key", "default") == "default"

    def test_persists_across_instances(self, path):
        """Should write values to disk."""
        JsonFileOptionStore(path).set("settings", {"sync_schedule": "weekly"})

        assert JsonFileOptionStore(path).get("settings") == {"sync_schedule": "weekly"}
        assert json.loads(path.read_text()) == {"settings": {"sync_schedule": "weekly"}}

    def test_set_keeps_other_keys(self, path):
        """Should replace only the written key."""
        store = JsonFileOptionStore(path)
        store.set("a", 1)
        store.set("b", 2)
        store.set("a", 3)

        assert store.get("a") == 3
        assert store.get("b") == 2

    def test_delete(self, path):
        """Should remove keys from the file."""
        store = JsonFileOptionStore(path)
        store.set("a", 1)

        assert store.delete("a") is True
        assert store.delete("a") is False
        assert store.get("a") is None

    def test_invalid_json(self, path):
        """Should treat a corrupt file as empty."""
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        store = JsonFileOptionStore(path)

        assert store.get("a") is None
        assert store.set("a", 1) is True
        assert store.get("a") == 1

    def test_invalid_utf8(self, path):
        """Should treat a file that is not valid UTF-8 as empty."""
        path.parent.mkdir(parents=True)
        path.write_bytes(b'{"dragonherd_settings": {"bugherd_api_key": "\xff\xfe"}}')

        store = JsonFileOptionStore(path)

        assert store.get("dragonherd_settings", {}) == {}

    def test_unreadable_path(self, path):
        """Should treat a path that cannot be opened as empty."""
        path.mkdir(parents=True)

        store = JsonFileOptionStore(path)

        assert store.get("a", "default") == "default"

    def test_no_temp_files_left(self, path):
        """Should not leave temporary files next to the store."""
        store = JsonFileOptionStore(path)
        store.set("a", 1)

        assert [p.name for p in path.parent.iterdir()] == ["options.json"]
