"""Clients for the issue tracker and the summarization API."""

from .bugherd import (
    BugherdTaskClient,
    CachedTaskClient,
    DemoTaskClient,
    DEMO_TASKS,
    create_task_client,
)
from .openai import (
    DemoSummarizer,
    OpenAISummarizer,
    MOCK_SUMMARY,
    create_summarizer,
)

__all__ = [
    "BugherdTaskClient",
    "CachedTaskClient",
    "DemoTaskClient",
    "DEMO_TASKS",
    "create_task_client",
    "DemoSummarizer",
    "OpenAISummarizer",
    "MOCK_SUMMARY",
    "create_summarizer",
]
