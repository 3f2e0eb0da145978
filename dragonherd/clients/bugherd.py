"""BugHerd task clients."""

import base64
import logging
import time
from typing import Optional, Sequence

import httpx

from ..domain.models import Task
from ..domain.protocols import TaskSource

logger = logging.getLogger(__name__)


DEMO_TASKS: tuple[Task, ...] = (
    Task(id=1, description="Fix login bug", status="todo", assignee_ids=(1,)),
    Task(id=2, description="Update user interface", status="in_progress", assignee_ids=(2,)),
    Task(id=3, description="Write documentation", status="done", assignee_ids=(3,)),
)


class DemoTaskClient:
    """Serves a fixed sample project without touching the network."""

    async def fetch_all_tasks(self, project_id: str) -> list[Task]:
        """Return the sample tasks for any project."""
        logger.debug(f"Demo mode: returning sample tasks for project {project_id}")
        return list(DEMO_TASKS)


class BugherdTaskClient:
    """Fetches tasks from the BugHerd API, page by page."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://www.bugherd.com/api_v2",
        max_tasks: int = 0,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize BugHerd client.

        Args:
            api_key: BugHerd API key
            base_url: API root URL
            max_tasks: Stop paging once this many tasks are fetched (0 = no cap)
            timeout: Per-request timeout in seconds
            http_client: Optional HTTP client for testing
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._max_tasks = max_tasks
        self._timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_headers(self) -> dict:
        """Get API request headers."""
        token = base64.b64encode(f"{self._api_key}:x".encode()).decode()
        return {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/json",
        }

    async def fetch_all_tasks(self, project_id: str) -> list[Task]:
        """Fetch every task of a project.

        Args:
            project_id: BugHerd project ID

        Returns:
            Tasks in API order, or an empty list if any request fails
        """
        client = self._http_client or httpx.AsyncClient()
        tasks: list[Task] = []
        page = 1
        try:
            while True:
                response = await client.get(
                    f"{self._base_url}/projects/{project_id}/tasks.json",
                    params={"page": page},
                    headers=self._get_headers(),
                    timeout=self._timeout,
                )
                response.raise_for_status()
                data = response.json()

                page_tasks = data.get("tasks") if isinstance(data, dict) else None
                if not page_tasks:
                    break

                tasks.extend(Task.from_api(item) for item in page_tasks)

                if self._max_tasks and len(tasks) >= self._max_tasks:
                    logger.info(
                        f"Project {project_id}: reached max of {self._max_tasks} tasks "
                        f"at page {page}"
                    )
                    tasks = tasks[: self._max_tasks]
                    break

                page += 1

        except httpx.HTTPError as e:
            logger.error(f"BugHerd API error for project {project_id}: {e}")
            return []
        except (ValueError, TypeError, AttributeError) as e:
            # Invalid JSON or task objects of the wrong shape
            logger.error(f"BugHerd returned an invalid response for project {project_id}: {e}")
            return []
        finally:
            if self._owns_client and not self._http_client:
                await client.aclose()

        logger.debug(f"Fetched {len(tasks)} task(s) for project {project_id}")
        return tasks


class CachedTaskClient:
    """Keeps fetched task lists per project for a fixed number of seconds."""

    def __init__(
        self,
        client: TaskSource,
        ttl_seconds: int,
        clock=time.monotonic,
    ) -> None:
        self._client = client
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Sequence[Task]]] = {}

    async def fetch_all_tasks(self, project_id: str) -> list[Task]:
        """Return cached tasks while fresh, otherwise fetch and cache."""
        if self._ttl <= 0:
            return list(await self._client.fetch_all_tasks(project_id))

        now = self._clock()
        cached = self._entries.get(project_id)
        if cached and now - cached[0] < self._ttl:
            logger.debug(f"Cache hit for project {project_id}")
            return list(cached[1])

        tasks = tuple(await self._client.fetch_all_tasks(project_id))
        # Failed fetches come back empty; do not pin them for the whole TTL
        if tasks:
            self._entries[project_id] = (now, tasks)
        return list(tasks)

    def invalidate(self, project_id: Optional[str] = None) -> None:
        """Drop one project's entry, or all entries."""
        if project_id is None:
            self._entries.clear()
        else:
            self._entries.pop(project_id, None)


def create_task_client(
    api_key: str,
    *,
    base_url: str = "https://www.bugherd.com/api_v2",
    max_tasks: int = 0,
    timeout: float = 30.0,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TaskSource:
    """Build the live client, or the demo client when no API key is set."""
    if not api_key:
        return DemoTaskClient()
    return BugherdTaskClient(
        api_key,
        base_url=base_url,
        max_tasks=max_tasks,
        timeout=timeout,
        http_client=http_client,
    )
