"""
Cancellable deferred task (last-call-wins debounce).

Each schedule() cancels a still-waiting call and starts a new timer. Once
the timer fires and the callback is running, it is no longer cancellable
by schedule(); the next call simply runs after it.

Dependencies: asyncio, draftsmith.observability
System role: Edit coalescing before compilation
"""

import asyncio
import logging
from typing import Awaitable, Callable

from draftsmith.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class Debouncer:
    """Run an async callback after a quiet period."""

    def __init__(self, delay_seconds: float, callback: Callable[[], Awaitable[None]]) -> None:
        self._delay = delay_seconds
        self._callback = callback
        self._waiting: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a scheduled call is still in its waiting window."""
        return self._waiting is not None and not self._waiting.done()

    def schedule(self) -> None:
        """(Re)start the timer; must be called from a running event loop."""
        if self.pending:
            self._waiting.cancel()
        task = asyncio.get_running_loop().create_task(self._run())
        self._waiting = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel(self) -> None:
        """Drop a waiting call. A callback already running is left alone."""
        if self.pending:
            self._waiting.cancel()
        self._waiting = None

    async def drain(self) -> None:
        """Wait until every scheduled call has finished or been cancelled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)
        if self._waiting is asyncio.current_task():
            self._waiting = None
        try:
            await self._callback()
        except Exception as e:
            # Background task: nobody awaits it, so the failure is logged here
            log_exception_with_context(logger, f"{__name__}:_run - Debounced callback failed", e)
