"""DragonHerd: scheduled LLM summaries of BugHerd project tasks."""

__version__ = "1.0.0"
