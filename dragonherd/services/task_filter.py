"""Task filters applied before composing a summary prompt."""

from functools import reduce
from typing import Callable, Sequence

from ..domain.models import Task


FilterStage = Callable[[Sequence[Task]], list[Task]]


def by_status(tasks: Sequence[Task], status: str) -> list[Task]:
    """Keep tasks whose status equals status exactly."""
    return [task for task in tasks if task.status == status]


def by_assignee(tasks: Sequence[Task], user_id: int) -> list[Task]:
    """Keep tasks assigned to user_id."""
    return [task for task in tasks if user_id in task.assignee_ids]


def by_keyword(tasks: Sequence[Task], keyword: str) -> list[Task]:
    """Keep tasks whose description contains keyword, ignoring case."""
    needle = keyword.lower()
    return [task for task in tasks if needle in (task.description or "").lower()]


def build_stages(status: str = "", user_id: int = 0, keyword: str = "") -> list[FilterStage]:
    """Build the filter stages for the given criteria.

    Stages run status, then assignee, then keyword. Empty criteria add no
    stage.
    """
    stages: list[FilterStage] = []
    if status:
        stages.append(lambda tasks: by_status(tasks, status))
    if user_id:
        stages.append(lambda tasks: by_assignee(tasks, user_id))
    if keyword:
        stages.append(lambda tasks: by_keyword(tasks, keyword))
    return stages


def apply_filters(
    tasks: Sequence[Task],
    status: str = "",
    user_id: int = 0,
    keyword: str = "",
) -> list[Task]:
    """Narrow tasks by every given criterion.

    Returns:
        A new list; the input is left untouched
    """
    stages = build_stages(status=status, user_id=user_id, keyword=keyword)
    return reduce(lambda current, stage: stage(current), stages, list(tasks))
