"""Shared pytest fixtures."""

import pytest

from dragonherd.domain.models import Task
from dragonherd.repositories.memory import InMemoryOptionStore
from dragonherd.repositories.settings import DragonHerdSettings


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Create the three-task sample project."""
    return [
        Task(id=1, description="Fix login bug", status="todo", assignee_ids=(1,)),
        Task(id=2, description="Update user interface", status="in_progress", assignee_ids=(2,)),
        Task(id=3, description="Write documentation", status="done", assignee_ids=(3,)),
    ]


@pytest.fixture
def option_store() -> InMemoryOptionStore:
    """Create an empty in-memory option store."""
    return InMemoryOptionStore()


@pytest.fixture
def settings_store(option_store) -> DragonHerdSettings:
    """Create a settings store over the in-memory option store."""
    return DragonHerdSettings(option_store)
