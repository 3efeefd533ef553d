"""Registry of pending per-marker asyncio tasks.

Each marker popup (and the entry form's destination prefill) gets its own
task keyed by a string, so completions arriving in any order only touch
their own target and never a shared "latest result".
"""

from __future__ import annotations


import asyncio
import logging
from typing import Any, Coroutine, Dict, List


class MarkerTasks:
    """Track name-lookup tasks on the running event loop by key."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._tasks: Dict[str, asyncio.Task] = {}

    def start(self, key: str, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        """Schedule ``coro`` under ``key``, cancelling an older task for the same key.

        Must be called while an event loop is running (UI event handlers).
        """
        self.cancel(key)
        task = asyncio.get_running_loop().create_task(coro, name=f"mapty:{key}")
        self._tasks[key] = task
        task.add_done_callback(lambda done, k=key: self._finished(k, done))
        return task

    def cancel(self, key: str) -> None:
        task = self._tasks.pop(key, None)
        if task is not None and not task.done():
            task.cancel()

    def cancel_all(self) -> None:
        for key in list(self._tasks.keys()):
            self.cancel(key)

    def pending(self) -> List[str]:
        return [key for key, task in self._tasks.items() if not task.done()]

    async def drain(self) -> None:
        """Wait until no task is pending, including tasks started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)
            for key, task in list(self._tasks.items()):
                if task.done():
                    del self._tasks[key]

    def _finished(self, key: str, task: asyncio.Task) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log.error("Marker task %s failed", key, exc_info=exc)


__all__ = ["MarkerTasks"]
