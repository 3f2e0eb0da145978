"""Builds the summarization prompt from a task list."""

from typing import Mapping, Optional, Sequence

from ..domain.models import Task


NO_TASKS_MESSAGE = "No tasks found to summarize."
PROMPT_PREAMBLE = "Please summarize the following tasks:\n\n"
UNASSIGNED = "Unassigned"

DEFAULT_USERS: dict[int, str] = {
    1: "Alice Johnson",
    2: "Bob Smith",
    3: "Charlie Brown",
    4: "Diana Prince",
}


class PromptComposer:
    """Turns tasks into a plain-text summarization request."""

    def __init__(self, users: Optional[Mapping[int, str]] = None) -> None:
        """Initialize composer.

        Args:
            users: User ID to display name directory
        """
        self._users = dict(DEFAULT_USERS if users is None else users)

    def resolve_assignee(self, task: Task) -> str:
        """Display name of the task's first assignee.

        Only the first ID is looked up; anything missing gives "Unassigned".
        """
        if not task.assignee_ids:
            return UNASSIGNED
        return self._users.get(task.assignee_ids[0], UNASSIGNED)

    def compose(self, tasks: Sequence[Task]) -> str:
        """Compose the prompt for the tasks, in input order."""
        if not tasks:
            return NO_TASKS_MESSAGE

        return PROMPT_PREAMBLE + "".join(self._format_task(task) for task in tasks)

    def _format_task(self, task: Task) -> str:
        description = "No description" if task.description is None else task.description
        status = "Unknown" if task.status is None else task.status
        return (
            f"Task #{task.id}: {description}\n"
            f"Status: {status}\n"
            f"Assignee: {self.resolve_assignee(task)}\n\n"
        )
