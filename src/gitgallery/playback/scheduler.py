"""Repeating timers for playback.

The controller owns at most one ``TimerHandle`` at a time and only ever
talks to a ``Scheduler``; which clock drives the ticks is up to the host.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from textual.message_pump import MessagePump
    from textual.timer import Timer


class TimerHandle(Protocol):
    """A live repeating timer.  ``cancel`` is idempotent."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Factory for repeating timers.

    The first call to *callback* happens one interval after start.
    """

    def start_repeating(
        self, interval_seconds: float, callback: Callable[[], None],
    ) -> TimerHandle: ...


class _AsyncioRepeatingTimer:
    """Fires *callback* on fixed deadlines of an asyncio loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval_seconds
        self._callback = callback
        self._cancelled = False
        self._deadline = loop.time() + interval_seconds
        self._handle: asyncio.TimerHandle | None = loop.call_at(self._deadline, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Schedule from the previous deadline so ticks do not drift
        self._deadline += self._interval
        now = self._loop.time()
        if self._deadline < now:
            # Missed deadlines are dropped, not replayed back to back
            self._deadline = now + self._interval
        self._handle = self._loop.call_at(self._deadline, self._fire)
        self._callback()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """Drive playback ticks from an asyncio event loop.

    Without an explicit *loop*, the running loop at ``start_repeating``
    time is used, so timers must be started from inside the loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def start_repeating(
        self, interval_seconds: float, callback: Callable[[], None],
    ) -> _AsyncioRepeatingTimer:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioRepeatingTimer(loop, interval_seconds, callback)


class _TextualTimerHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer: Timer | None = timer

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None


class TextualScheduler:
    """Drive playback ticks with ``set_interval`` of a Textual app or widget."""

    def __init__(self, owner: MessagePump) -> None:
        self._owner = owner

    def start_repeating(
        self, interval_seconds: float, callback: Callable[[], None],
    ) -> _TextualTimerHandle:
        timer = self._owner.set_interval(interval_seconds, callback, name="playback")
        return _TextualTimerHandle(timer)
