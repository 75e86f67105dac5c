"""Debounce scheduler built on the running asyncio loop."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable

from artist_explorer.logging import logger

Callback = Callable[..., Awaitable[Any] | Any]


class Debouncer:
    """Owns one pending timer; each trigger replaces the previous one.

    ``trigger(*args)`` cancels any invocation that has not fired yet and
    schedules ``callback(*args)`` after ``delay_seconds`` of quiet. Coroutine
    callbacks run as tasks tracked by the debouncer; once started they are
    never cancelled by a later trigger.
    """

    def __init__(self, callback: Callback, delay_seconds: float, *, name: str = "debounce") -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self._callback = callback
        self.delay_seconds = delay_seconds
        self.name = name
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[Any]] = set()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.trigger(*args, **kwargs)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay_seconds, self._fire, args, kwargs)

    def cancel(self) -> bool:
        """Drop the pending invocation, if any. Returns whether one was dropped."""

        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    async def wait(self) -> None:
        """Wait until every started callback task has finished."""

        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._tasks.difference_update(tasks)

    def _fire(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._handle = None
        result = self._callback(*args, **kwargs)
        if not inspect.isawaitable(result):
            return
        task = asyncio.ensure_future(result)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "debounced_callback_failed",
                debouncer=self.name,
                error=str(exc),
                exc_info=exc,
            )


def debounce(callback: Callback, delay_seconds: float, *, name: str = "debounce") -> Debouncer:
    """Return a callable handle that debounces ``callback``."""

    return Debouncer(callback, delay_seconds, name=name)


__all__ = ["Debouncer", "debounce"]
