"""Fire-and-forget background tasks.

Side effects such as mail and push delivery run here, after the primary
state change has been committed. Their failures are logged and never reach
the request that spawned them.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import logfire


class BackgroundDispatcher:
    """Spawns background tasks and keeps them alive until they finish."""

    def __init__(self) -> None:
        # The event loop only keeps weak references to tasks
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task:
        """Schedule a coroutine on the running loop.

        Args:
            coro: Coroutine to run
            name: Task name, used in logs

        Returns:
            The scheduled task
        """
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logfire.debug("Background task spawned", task=name)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logfire.warn("Background task cancelled", task=task.get_name())
            return
        error = task.exception()
        if error is not None:
            logfire.error(
                "Background task failed",
                task=task.get_name(),
                error=str(error),
                error_type=type(error).__name__,
            )

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for all running tasks to finish.

        Used on shutdown and in tests.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
