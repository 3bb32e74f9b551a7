"""Detached background tasks with an error log sink.

Used for work that must not block the response but whose failures must
not be lost (e.g. dashboard cache write-back). Holds a strong reference
to each task until it finishes so the event loop cannot drop it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """Fire-and-forget scheduler. Errors are logged, never raised to the caller."""

    def __init__(self, error_logger: logging.Logger | None = None) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._logger = error_logger or logger
        self.failed_count = 0

    @property
    def pending(self) -> int:
        """Number of tasks not yet finished."""
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
        """Schedule coro on the running loop and return immediately."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            self._logger.warning("Background task cancelled: %s", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self.failed_count += 1
            self._logger.error(
                "Background task failed: %s",
                task.get_name(),
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def drain(self) -> None:
        """Wait for every pending task (shutdown, tests). Errors stay in the log."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
