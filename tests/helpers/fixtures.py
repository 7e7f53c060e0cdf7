"""Deterministic clock and event factories for playback tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from gitgallery.types.playback import PlaybackEvent

_BASE_MS = 1_772_000_000_000


def make_event(i: int, **extra: Any) -> PlaybackEvent:
    """A PlaybackEvent one second after the previous one."""
    ms = _BASE_MS + i * 1000
    return PlaybackEvent(
        timestamp=f"2026-02-25T06:13:{20 + i:02d}.000Z",
        timestamp_ms=ms,
        event_type="tool_call",
        tool_name=extra.pop("tool_name", "Read"),
        session_id=extra.pop("session_id", "session-1"),
        file_paths=extra.pop("file_paths", [f"src/file_{i}.py"]),
        extra=extra,
    )


def make_events(n: int) -> list[PlaybackEvent]:
    return [make_event(i) for i in range(n)]


@dataclass
class ManualTimer:
    interval: float
    callback: Callable[[], None]
    next_due: float
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Virtual clock: timers only fire when the test calls ``advance``."""

    now: float = 0.0
    timers: list[ManualTimer] = field(default_factory=list)

    def start_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval_seconds, callback, self.now + interval_seconds)
        self.timers.append(timer)
        return timer

    @property
    def live_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in order.  Returns fire count."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [t for t in self.live_timers if t.next_due <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_due)
            self.now = timer.next_due
            timer.next_due += timer.interval
            timer.callback()
            fired += 1
        self.now = target
        return fired
