"""Fetch, filter, compose and summarize tasks of a project."""

import logging
from typing import Awaitable, Callable, Optional, Union

from ..domain.protocols import Summarizer, TaskSource
from .prompt_composer import PromptComposer
from .task_filter import apply_filters


logger = logging.getLogger(__name__)

SUMMARY_UNAVAILABLE = "Unable to generate summary."

PersistHook = Callable[[str], Union[None, Awaitable[None]]]


def log_summary(summary: str) -> None:
    """Default persistence hook: write the summary to the log."""
    logger.info(f"DragonHerd Summary: {summary}")


class SyncOrchestrator:
    """Runs the summarize pipeline for one project at a time."""

    def __init__(
        self,
        task_source: TaskSource,
        summarizer: Summarizer,
        *,
        composer: Optional[PromptComposer] = None,
        default_project_id: str = "",
    ) -> None:
        """Initialize orchestrator.

        Args:
            task_source: Where tasks are fetched from
            summarizer: Turns the composed prompt into a summary
            composer: Prompt composer (default user directory if omitted)
            default_project_id: Project used by run()
        """
        self._task_source = task_source
        self._summarizer = summarizer
        self._composer = composer or PromptComposer()
        self._default_project_id = default_project_id

    @property
    def default_project_id(self) -> str:
        return self._default_project_id

    async def run(self, persist: Optional[PersistHook] = None) -> Optional[str]:
        """Summarize every task of the default project, unfiltered.

        Args:
            persist: Called with the summary when one is produced

        Returns:
            The summary, or None if summarization failed
        """
        tasks = await self._task_source.fetch_all_tasks(self._default_project_id)
        prompt = self._composer.compose(tasks)
        summary = await self._summarizer.summarize(prompt)

        if summary:
            result = (persist or log_summary)(summary)
            if result is not None:
                await result

        return summary

    async def compose_filtered(
        self,
        project_id: str,
        status: str = "",
        user_id: int = 0,
        keyword: str = "",
    ) -> str:
        """Fetch and filter tasks, and return the prompt that would be sent."""
        tasks = await self._task_source.fetch_all_tasks(project_id)
        filtered = apply_filters(tasks, status=status, user_id=user_id, keyword=keyword)
        logger.debug(
            f"Project {project_id}: {len(filtered)} of {len(tasks)} task(s) "
            f"match status={status!r} user_id={user_id} keyword={keyword!r}"
        )
        return self._composer.compose(filtered)

    async def run_filtered(
        self,
        project_id: str,
        status: str = "",
        user_id: int = 0,
        keyword: str = "",
    ) -> str:
        """Summarize the tasks of a project matching the given criteria.

        Empty criteria are not applied.

        Returns:
            The summary, or SUMMARY_UNAVAILABLE if summarization failed
        """
        prompt = await self.compose_filtered(
            project_id, status=status, user_id=user_id, keyword=keyword
        )
        summary = await self._summarizer.summarize(prompt)
        return summary if summary is not None else SUMMARY_UNAVAILABLE
