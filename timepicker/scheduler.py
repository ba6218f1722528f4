"""Deferred scheduling of "bring into view" requests.

Opening the panel asks the rendering side to scroll the focused hour and
minute into view, but only after the panel contents have been laid out. The
request therefore runs on the next turn of the host's event loop. Each
scheduler returns a handle with ``cancel()`` so a newer open can supersede a
pending request from an older one.

:class:`ManualScheduler` is pumped explicitly by the host loop (and by
tests); :class:`AsyncioScheduler` hands the callback to ``loop.call_soon``.
"""
from __future__ import annotations

import asyncio
import collections
import logging
from typing import Callable, Deque, Optional, Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_soon(callback)`` returning a cancellable handle."""

    def call_soon(self, callback: Callable[[], None]) -> Cancellable: ...


class ScheduledCall:
    """Cancellable handle for a callback queued on a :class:`ManualScheduler`."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        if not self._cancelled:
            self._callback()


class ManualScheduler:
    """Queue callbacks and run them when the host calls :meth:`run_pending`.

    Example::

        sched = ManualScheduler()
        handle = sched.call_soon(lambda: print("later"))
        sched.run_pending()      # prints "later"
    """

    def __init__(self) -> None:
        self._queue: Deque[ScheduledCall] = collections.deque()

    def call_soon(self, callback: Callable[[], None]) -> ScheduledCall:
        handle = ScheduledCall(callback)
        self._queue.append(handle)
        return handle

    def pending(self) -> int:
        """Number of queued, not-cancelled callbacks."""
        return sum(1 for h in self._queue if not h.cancelled())

    def run_pending(self) -> int:
        """Run every callback queued before this call; return how many ran.

        Callbacks scheduled while running wait for the next turn.
        """
        ran = 0
        for _ in range(len(self._queue)):
            handle = self._queue.popleft()
            if handle.cancelled():
                continue
            try:
                handle._run()
            except Exception:
                logger.exception("Scheduled callback raised an exception")
            ran += 1
        return ran


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop.

    Parameters
    ----------
    loop:
        Loop to schedule on. Defaults to the running loop at call time.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_soon(self, callback: Callable[[], None]) -> asyncio.Handle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_soon(callback)
