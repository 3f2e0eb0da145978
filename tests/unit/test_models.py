"""Tests for domain models."""

from datetime import datetime, timezone

import pytest

from dragonherd.domain.models import (
    TIMESTAMP_FORMAT,
    ProjectConfig,
    SyncResult,
    Task,
    current_timestamp,
    format_local,
)


class TestTask:
    """Tests for Task model."""

    def test_from_api(self):
        """Should map the tracker's task fields."""
        task = Task.from_api(
            {
                "id": 42,
                "description": "Broken footer",
                "status": "todo",
                "assignee_ids": [3, 1],
                "priority": "high",
            }
        )

        assert task.id == 42
        assert task.description == "Broken footer"
        assert task.status == "todo"
        assert task.assignee_ids == (3, 1)

    def test_from_api_missing_fields(self):
        """Should leave absent fields as None and no assignees."""
        task = Task.from_api({"id": 7})

        assert task.description is None
        assert task.status is None
        assert task.assignee_ids == ()

    def test_from_api_null_assignees(self):
        """Should treat null assignee_ids as no assignees."""
        task = Task.from_api({"id": 7, "assignee_ids": None})
        assert task.assignee_ids == ()

    def test_immutable(self):
        """Should not allow field assignment."""
        task = Task(id=1)
        with pytest.raises(AttributeError):
            task.status = "done"


class TestProjectConfig:
    """Tests for ProjectConfig model."""

    def test_round_trip(self):
        """Should keep every field through to_dict/from_dict."""
        project = ProjectConfig(
            id="p1",
            name="Website",
            description="Marketing site",
            active=False,
            created_at="2024-01-01 10:00:00",
            updated_at="2024-01-02 10:00:00",
        )

        assert ProjectConfig.from_dict(project.to_dict()) == project

    def test_from_dict_defaults(self):
        """Should default to active with fresh timestamps."""
        project = ProjectConfig.from_dict({"id": 12, "name": "Shop"})

        assert project.id == "12"
        assert project.active is True
        assert project.description == ""
        datetime.strptime(project.created_at, TIMESTAMP_FORMAT)


class TestSyncResult:
    """Tests for SyncResult model."""

    def test_default_timestamp(self):
        """Should stamp the current local time."""
        result = SyncResult(summary="All good")
        datetime.strptime(result.timestamp, TIMESTAMP_FORMAT)

    def test_to_dict(self):
        """Should serialize summary and timestamp."""
        result = SyncResult(summary="All good", timestamp="2024-01-01 00:00:00")
        assert result.to_dict() == {"summary": "All good", "timestamp": "2024-01-01 00:00:00"}


def test_current_timestamp_format():
    """Should format as YYYY-MM-DD HH:MM:SS."""
    value = current_timestamp()
    assert len(value) == 19
    datetime.strptime(value, TIMESTAMP_FORMAT)


class TestFormatLocal:
    """Tests for format_local."""

    def test_naive_unchanged(self):
        """Should format a naive datetime as is."""
        assert format_local(datetime(2024, 5, 1, 9, 30, 0)) == "2024-05-01 09:30:00"

    def test_aware_converted_to_local(self):
        """Should convert an aware datetime to local time."""
        moment = datetime(2024, 5, 1, 9, 30, 0, tzinfo=timezone.utc)

        assert format_local(moment) == moment.astimezone().strftime(TIMESTAMP_FORMAT)

    def test_matches_current_timestamp_clock(self):
        """Should put a UTC time on the same clock as current_timestamp."""
        before = datetime.strptime(current_timestamp(), TIMESTAMP_FORMAT)
        formatted = format_local(datetime.now(timezone.utc))
        after = datetime.strptime(current_timestamp(), TIMESTAMP_FORMAT)

        assert before <= datetime.strptime(formatted, TIMESTAMP_FORMAT) <= after
