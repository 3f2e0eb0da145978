"""Tests for SyncOrchestrator."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from dragonherd.clients.bugherd import DemoTaskClient
from dragonherd.clients.openai import MOCK_SUMMARY, DemoSummarizer
from dragonherd.services.prompt_composer import PromptComposer
from dragonherd.services.sync_service import SUMMARY_UNAVAILABLE, SyncOrchestrator


@pytest.fixture
def task_source(sample_tasks):
    source = MagicMock()
    source.fetch_all_tasks = AsyncMock(return_value=sample_tasks)
    return source


@pytest.fixture
def summarizer():
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock(return_value="A summary")
    return summarizer


class TestRun:
    """Tests for the unfiltered run."""

    @pytest.mark.asyncio
    async def test_demo_mode(self):
        """Should produce the mock summary with no keys configured."""
        orchestrator = SyncOrchestrator(DemoTaskClient(), DemoSummarizer())
        persist = MagicMock()

        summary = await orchestrator.run(persist=persist)

        assert summary == MOCK_SUMMARY
        persist.assert_called_once_with(MOCK_SUMMARY)

    @pytest.mark.asyncio
    async def test_uses_default_project(self, task_source, summarizer, sample_tasks):
        """Should fetch the default project and summarize every task."""
        orchestrator = SyncOrchestrator(task_source, summarizer, default_project_id="42")

        await orchestrator.run(persist=lambda s: None)

        task_source.fetch_all_tasks.assert_awaited_once_with("42")
        summarizer.summarize.assert_awaited_once_with(PromptComposer().compose(sample_tasks))

    @pytest.mark.asyncio
    async def test_async_persist(self, task_source, summarizer):
        """Should await an async persistence hook."""
        orchestrator = SyncOrchestrator(task_source, summarizer)
        persist = AsyncMock()

        await orchestrator.run(persist=persist)

        persist.assert_awaited_once_with("A summary")

    @pytest.mark.asyncio
    async def test_no_persist_on_failure(self, task_source, summarizer):
        """Should not persist when summarization fails."""
        summarizer.summarize.return_value = None
        orchestrator = SyncOrchestrator(task_source, summarizer)
        persist = MagicMock()

        assert await orchestrator.run(persist=persist) is None
        persist.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_persist_logs(self, task_source, summarizer, caplog):
        """Should log the summary when no hook is given."""
        orchestrator = SyncOrchestrator(task_source, summarizer)

        with caplog.at_level("INFO"):
            await orchestrator.run()

        assert "DragonHerd Summary: A summary" in caplog.text

    @pytest.mark.asyncio
    async def test_no_tasks(self, summarizer):
        """Should still ask for a summary of the no-tasks sentinel."""
        source = MagicMock()
        source.fetch_all_tasks = AsyncMock(return_value=[])
        orchestrator = SyncOrchestrator(source, summarizer)

        await orchestrator.run(persist=lambda s: None)

        summarizer.summarize.assert_awaited_once_with("No tasks found to summarize.")


class TestRunFiltered:
    """Tests for the filtered run."""

    @pytest.mark.asyncio
    async def test_status_filter_prompt(self):
        """Should only include matching tasks in the prompt."""
        orchestrator = SyncOrchestrator(DemoTaskClient(), DemoSummarizer())

        prompt = await orchestrator.compose_filtered("any", status="todo")

        assert "Task #1" in prompt
        assert "Task #2" not in prompt
        assert "Task #3" not in prompt

    @pytest.mark.asyncio
    async def test_summary_of_filtered_prompt(self, task_source, summarizer, sample_tasks):
        """Should summarize exactly the composed prompt of the filtered tasks."""
        orchestrator = SyncOrchestrator(task_source, summarizer)

        summary = await orchestrator.run_filtered("42", user_id=2)

        assert summary == "A summary"
        task_source.fetch_all_tasks.assert_awaited_once_with("42")
        summarizer.summarize.assert_awaited_once_with(
            PromptComposer().compose([sample_tasks[1]])
        )

    @pytest.mark.asyncio
    async def test_no_match(self, task_source, summarizer):
        """Should summarize the sentinel when nothing matches."""
        orchestrator = SyncOrchestrator(task_source, summarizer)

        await orchestrator.run_filtered("42", keyword="nothing matches this")

        summarizer.summarize.assert_awaited_once_with("No tasks found to summarize.")

    @pytest.mark.asyncio
    async def test_fallback_on_failure(self, task_source, summarizer):
        """Should return the fallback text when summarization fails."""
        summarizer.summarize.return_value = None
        orchestrator = SyncOrchestrator(task_source, summarizer)

        assert await orchestrator.run_filtered("42") == SUMMARY_UNAVAILABLE
        assert SUMMARY_UNAVAILABLE == "Unable to generate summary."
