"""Fire-and-forget task runner."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

_logger = logging.getLogger(__name__)


def log_task_error(name: str, exc: BaseException) -> None:
    """Default handler: log the failure of a background task."""
    _logger.error("Background task %s failed", name, exc_info=exc)


@dataclass
class BackgroundTasks:
    """Spawns detached tasks and routes their errors to a handler."""

    error_handler: Callable[[str, BaseException], None] = log_task_error
    _tasks: set[asyncio.Task[Any]] = field(default_factory=set)

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def spawn(
        self, coro: Coroutine[Any, Any, Any], *, name: str = "background"
    ) -> asyncio.Task[Any]:
        """Schedule ``coro`` without awaiting it."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def drain(self) -> None:
        """Wait for every pending task to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.error_handler(task.get_name(), exc)
