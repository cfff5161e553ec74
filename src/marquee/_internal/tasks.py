"""Background tasks spawned from synchronous event listeners.

DOM listeners are plain functions, but navigation and menu loading are
coroutines. ``TaskSet.spawn()`` schedules them on the running loop and
keeps a strong reference until they finish; ``settle()`` waits for
everything spawned so far (and anything those tasks spawn in turn).
"""

import asyncio
from collections.abc import Coroutine
from typing import Any


class TaskSet:
    __slots__ = ("_tasks",)

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Schedule ``coro`` on the running loop.

        Raises ``RuntimeError`` when called outside an event loop; ``coro``
        is closed first so it is not left un-awaited.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def settle(self) -> None:
        """Wait until no spawned task is pending.

        Task failures are left on the task objects; callers that care
        hold on to the task returned by ``spawn()``.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def __len__(self) -> int:
        return len(self._tasks)
