"""Tests for CLI commands."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from click.testing import CliRunner

from dragonherd.cli.main import cli
from dragonherd.clients.openai import MOCK_SUMMARY
from dragonherd.container import get_container, reset_container
from dragonherd.domain.models import SyncResult
from dragonherd.repositories.memory import InMemoryOptionStore
from dragonherd.scheduler.jobs import HookRegistry
from dragonherd.scheduler.scheduler import TriggerScheduler


@pytest.fixture(autouse=True)
def setup_container(monkeypatch):
    """Set up container for each test."""
    # Keep root logging handlers out of CliRunner's captured streams
    monkeypatch.setattr("dragonherd.cli.main.configure_logging", lambda debug=False: None)
    reset_container()
    container = get_container()
    container.configure_option_store(InMemoryOptionStore)
    container.configure_trigger_scheduler(
        lambda: TriggerScheduler(HookRegistry(), scheduler=AsyncIOScheduler(timezone="UTC"))
    )
    yield
    reset_container()


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def settings():
    return get_container().dragonherd_settings


class TestSummarizeCommand:
    """Tests for summarize command."""

    def test_requires_project(self, runner):
        """Should fail without a project or default project."""
        result = runner.invoke(cli, ["summarize"])

        assert result.exit_code == 1
        assert "No project given" in result.output

    def test_demo_summary(self, runner):
        """Should print the mock summary in demo mode."""
        result = runner.invoke(cli, ["summarize", "-p", "7", "--status", "todo"])

        assert result.exit_code == 0
        assert MOCK_SUMMARY in result.output

    def test_show_prompt(self, runner, settings):
        """Should print the filtered prompt for the default project."""
        settings.set("default_project_id", "7")

        result = runner.invoke(cli, ["summarize", "--show-prompt", "--user", "2"])

        assert result.exit_code == 0
        assert "Task #2: Update user interface" in result.output
        assert "Task #1" not in result.output


class TestRunCommand:
    """Tests for run command."""

    def test_run_demo(self, runner):
        """Should print the mock summary."""
        result = runner.invoke(cli, ["run"])

        assert result.exit_code == 0
        assert MOCK_SUMMARY in result.output


class TestSyncCommand:
    """Tests for sync command."""

    def test_requires_api_key(self, runner):
        """Should fail without a BugHerd API key."""
        result = runner.invoke(cli, ["sync"])

        assert result.exit_code == 1
        assert "API key not configured" in result.output

    def test_sync_stores_results(self, runner, settings, monkeypatch):
        """Should sync every active project and store the results."""
        settings.set("bugherd_api_key", "bh")
        settings.add_project({"id": "p1", "name": "One"})
        orchestrator = MagicMock()
        orchestrator.run_filtered = AsyncMock(return_value="Summary of p1")
        monkeypatch.setattr(get_container(), "create_orchestrator", lambda bh, sk: orchestrator)

        result = runner.invoke(cli, ["sync"])

        assert result.exit_code == 0
        assert "Sync finished" in result.output
        assert get_container().history.get("p1")[0].summary == "Summary of p1"


class TestStatusCommand:
    """Tests for status command."""

    def test_status_empty(self, runner):
        """Should show schedule and no results."""
        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "Schedule: Daily (daily)" in result.output
        assert "Last sync: Never" in result.output
        assert "No sync results yet" in result.output

    def test_status_with_results(self, runner):
        """Should show the latest result per project."""
        get_container().history.append("p1", SyncResult("All good", "2024-05-01 08:30:00"))

        result = runner.invoke(cli, ["status"])

        assert "p1 (1 result(s))" in result.output
        assert "2024-05-01 08:30:00: All good" in result.output

    def test_status_json(self, runner):
        """Should output the status as JSON."""
        result = runner.invoke(cli, ["status", "--json"])

        data = json.loads(result.output)
        assert data["schedule"] == "daily"
        assert data["sync_results"] == {}


class TestClearCommand:
    """Tests for clear command."""

    def test_clear(self, runner):
        """Should clear results after confirmation."""
        get_container().history.append("p1", SyncResult("ok"))

        result = runner.invoke(cli, ["clear", "--yes"])

        assert result.exit_code == 0
        assert get_container().history.get_all() == {}

    def test_clear_aborted(self, runner):
        """Should keep results when not confirmed."""
        get_container().history.append("p1", SyncResult("ok"))

        result = runner.invoke(cli, ["clear"], input="n\n")

        assert result.exit_code == 1
        assert "p1" in get_container().history.get_all()


class TestProjectsCommands:
    """Tests for projects commands."""

    def test_list_empty(self, runner):
        """Should show no projects message."""
        result = runner.invoke(cli, ["projects", "list"])

        assert result.exit_code == 0
        assert "No projects configured" in result.output

    def test_add_and_list(self, runner):
        """Should add and list a project."""
        result = runner.invoke(cli, ["projects", "add", "p1", "Website", "-d", "Main site"])
        assert result.exit_code == 0

        result = runner.invoke(cli, ["projects", "list"])

        assert "[p1] Website" in result.output
        assert "Main site" in result.output

    def test_add_inactive(self, runner, settings):
        """Should store inactive projects."""
        runner.invoke(cli, ["projects", "add", "p1", "Website", "--inactive"])

        assert settings.get_projects()["p1"].active is False

    def test_remove(self, runner, settings):
        """Should remove a project."""
        settings.add_project({"id": "p1", "name": "Website"})

        result = runner.invoke(cli, ["projects", "remove", "p1"])

        assert result.exit_code == 0
        assert settings.get_projects() == {}

    def test_remove_missing(self, runner):
        """Should fail for unknown projects."""
        result = runner.invoke(cli, ["projects", "remove", "nope"])

        assert result.exit_code == 1
        assert "Project not found" in result.output


class TestConfigCommands:
    """Tests for config commands."""

    def test_get_masks_keys(self, runner, settings):
        """Should mask API keys when showing all settings."""
        settings.set("openai_api_key", "sk-secret")

        result = runner.invoke(cli, ["config", "get"])

        assert result.exit_code == 0
        assert "sk-secret" not in result.output
        assert json.loads(result.output)["openai_api_key"] == "********"

    def test_get_key(self, runner):
        """Should show a single setting."""
        result = runner.invoke(cli, ["config", "get", "cache_duration"])
        assert result.output.strip() == "3600"

    def test_set(self, runner, settings):
        """Should validate and store a setting."""
        result = runner.invoke(cli, ["config", "set", "--", "max_tasks_per_sync", "-25"])

        assert result.exit_code == 0
        assert settings.get_max_tasks_per_sync() == 25

    def test_set_custom_interval(self, runner, settings):
        """Should accept the scheduler's custom intervals."""
        result = runner.invoke(cli, ["config", "set", "sync_schedule", "fifteen_minutes"])

        assert result.exit_code == 0
        assert settings.get_sync_schedule() == "fifteen_minutes"

    def test_set_invalid(self, runner, settings):
        """Should reject invalid values."""
        result = runner.invoke(cli, ["config", "set", "notification_email", "nope"])

        assert result.exit_code == 1
        assert settings.get_notification_email() == ""

    def test_export_import(self, runner, settings, tmp_path):
        """Should export without keys and import from a file."""
        settings.update({"bugherd_api_key": "bh", "sync_schedule": "weekly"})

        exported = runner.invoke(cli, ["config", "export"]).output
        assert json.loads(exported)["bugherd_api_key"] == ""

        settings.delete()
        backup = tmp_path / "settings.json"
        backup.write_text(exported)

        result = runner.invoke(cli, ["config", "import", str(backup)])

        assert result.exit_code == 0
        assert settings.get_sync_schedule() == "weekly"
        assert settings.get_bugherd_api_key() == ""

    def test_import_invalid(self, runner, tmp_path):
        """Should fail on an invalid file."""
        backup = tmp_path / "settings.json"
        backup.write_text("not json")

        result = runner.invoke(cli, ["config", "import", str(backup)])

        assert result.exit_code == 1
