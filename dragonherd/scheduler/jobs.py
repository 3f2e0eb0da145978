"""Named hooks the trigger scheduler fires."""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional


@dataclass
class Hook:
    """A callback bound to a hook name."""

    name: str
    func: Callable[[], Any]
    description: str = ""
    last_run: Optional[datetime] = None


class HookRegistry:
    """Registry mapping hook names to callbacks."""

    def __init__(self):
        self._hooks: dict[str, Hook] = {}

    def register(
        self,
        name: str,
        func: Callable[[], Any],
        description: str = "",
    ) -> Hook:
        """Bind a callback to a hook name, replacing any previous one.

        Args:
            name: Hook name
            func: Callback, sync or async, taking no arguments
            description: Hook description

        Returns:
            Created Hook instance
        """
        hook = Hook(name=name, func=func, description=description)
        self._hooks[name] = hook
        return hook

    def unregister(self, name: str) -> bool:
        """Unbind a hook.

        Returns:
            True if removed, False if not found
        """
        if name in self._hooks:
            del self._hooks[name]
            return True
        return False

    def get(self, name: str) -> Optional[Hook]:
        """Get hook by name."""
        return self._hooks.get(name)

    def list_hooks(self) -> list[Hook]:
        """List all registered hooks."""
        return list(self._hooks.values())

    async def run(self, name: str) -> Any:
        """Run a hook's callback now.

        Args:
            name: Hook name to run

        Returns:
            Result from the callback

        Raises:
            KeyError: If hook not found
        """
        hook = self._hooks.get(name)
        if not hook:
            raise KeyError(f"Hook not found: {name}")

        result = hook.func()
        if asyncio.iscoroutine(result):
            result = await result

        hook.last_run = datetime.now()
        return result

    def clear(self) -> None:
        """Clear all registered hooks."""
        self._hooks.clear()
