"""Single-slot delayed-task scheduler (debouncing) on an asyncio loop.

Submitting a task cancels any previously submitted task that has not
started yet and schedules the new one after a fixed delay, so only the
last request in a burst runs. A task that has already started is never
interrupted.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("logit_bubbles")


class Debouncer:
    """Cancel-and-reschedule timer holding at most one pending task."""

    def __init__(self, delay: float, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the debouncer.

        Args:
            delay: Seconds between the last submission and the run.
            loop: Event loop to schedule on. When omitted, the running loop
                at submission time is used.
        """
        self._delay = max(0.0, delay)
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay(self) -> float:
        """Delay in seconds."""
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a submitted task is waiting to run."""
        return self._handle is not None

    def submit(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)``, replacing any pending task.

        Raises:
            RuntimeError: If no loop was given and none is running.
        """
        if self.cancel():
            logger.debug("debounce: replaced pending task")
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._run, callback, args)

    def cancel(self) -> bool:
        """Drop the pending task, if any.

        Returns:
            True if a task was cancelled.
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _run(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handle = None
        callback(*args)
