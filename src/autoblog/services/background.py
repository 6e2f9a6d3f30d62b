"""Background task queue for fire-and-forget side effects.

Used for calls whose outcome must never affect the caller, such as
notifying the stock photo service that an image was used.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

_logger = logging.getLogger("content.pipeline")


class BackgroundTasks:
    """Holds strong references to detached tasks until they finish.

    Responsibilities:
    - Scheduling coroutines without awaiting them
    - Logging failures when a task completes
    - Awaiting outstanding work on shutdown

    Usage:
        background = BackgroundTasks()
        background.submit(client.get(url), name="unsplash_download")
        ...
        await background.drain()
    """

    def __init__(self):
        self._tasks: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task[Any]:
        """Schedule a coroutine on the running loop.

        Args:
            coro: Coroutine to run.
            name: Label used in failure logs.

        Returns:
            The created task.
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning(f"Background task {task.get_name()} failed: {exc}")

    async def drain(self) -> None:
        """Wait for every outstanding task to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
