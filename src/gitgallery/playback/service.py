"""Event playback controller.

Steps a cursor through an ordered list of session events:

- Auto-advance on a repeating timer at a selectable speed
- Play/pause, previous/next, jump to start/end/index
- State and per-event notifications for views that highlight the
  current event

The controller never raises for misuse.  Operations whose preconditions
do not hold (empty sequence, cursor already at an end, index out of
range) are no-ops.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Sequence

from gitgallery.playback.listeners import ListenerSet
from gitgallery.playback.scheduler import Scheduler, TimerHandle
from gitgallery.types.playback import EventT, PlaybackSpeed, PlaybackState

logger = logging.getLogger(__name__)

StateListener = Callable[[PlaybackState[EventT]], object]
EventListener = Callable[[EventT, int], object]


class EventPlaybackService(Generic[EventT]):
    """Play back a sequence of events one tick at a time.

    Events are opaque to the controller and are handed to listeners as-is.
    The sequence is not copied; callers must not mutate it after loading.
    """

    def __init__(
        self,
        events: Sequence[EventT] | None = None,
        *,
        scheduler: Scheduler,
        speed: PlaybackSpeed = PlaybackSpeed.NORMAL,
    ) -> None:
        self._events: Sequence[EventT] = events if events is not None else []
        self._current_index = -1
        self._is_playing = False
        self._speed = PlaybackSpeed(speed)
        self._scheduler = scheduler
        self._timer: TimerHandle | None = None

        self._state_listeners: ListenerSet[[PlaybackState[EventT]]] = ListenerSet("state")
        self._event_listeners: ListenerSet[[EventT, int]] = ListenerSet("event")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def events(self) -> Sequence[EventT]:
        return self._events

    @property
    def total_events(self) -> int:
        return len(self._events)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def speed(self) -> PlaybackSpeed:
        return self._speed

    def get_current_event(self) -> EventT | None:
        if 0 <= self._current_index < len(self._events):
            return self._events[self._current_index]
        return None

    def get_state(self) -> PlaybackState[EventT]:
        return PlaybackState(
            is_playing=self._is_playing,
            current_index=self._current_index,
            total_events=len(self._events),
            speed=self._speed,
            current_event=self.get_current_event(),
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_events(self, events: Sequence[EventT]) -> None:
        """Replace the sequence and return to the not-started state."""
        self.pause()
        self._events = events
        self._current_index = -1
        self._emit_state()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def play(self) -> None:
        if self._is_playing or not self._events:
            return

        # Playing from the last event starts over
        if self._current_index == len(self._events) - 1:
            self._current_index = -1

        if self._current_index == -1:
            self._current_index = 0
            self._emit_current_event()

        self._start_interval()
        self._is_playing = True
        self._emit_state()

    def pause(self) -> None:
        if not self._is_playing:
            return

        self._is_playing = False
        self._stop_interval()
        self._emit_state()

    def toggle_play_pause(self) -> None:
        if self._is_playing:
            self.pause()
        else:
            self.play()

    def set_speed(self, speed: PlaybackSpeed | float) -> None:
        try:
            self._speed = PlaybackSpeed(speed)
        except ValueError:
            logger.warning("Ignoring unsupported playback speed %r", speed)
            return

        if self._is_playing:
            self._start_interval()

        self._emit_state()

    def reset(self) -> None:
        self.pause()
        self._current_index = -1
        self._emit_state()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> None:
        if self._current_index < len(self._events) - 1:
            self._current_index += 1
            self._emit_current_event()
        else:
            self.pause()

    def previous(self) -> None:
        if self._current_index > 0:
            self._current_index -= 1
            self._emit_current_event()

    def go_to_start(self) -> None:
        self.pause()
        if not self._events:
            return
        self._current_index = 0
        self._emit_current_event()

    def go_to_end(self) -> None:
        self.pause()
        self._current_index = len(self._events) - 1
        self._emit_current_event()

    def go_to_index(self, index: int) -> None:
        if not 0 <= index < len(self._events):
            return

        was_playing = self._is_playing
        self.pause()
        self._current_index = index
        self._emit_current_event()
        if was_playing:
            self.play()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_state_change(self, listener: StateListener[EventT]) -> Callable[[], None]:
        """Subscribe to state snapshots.  Returns the unsubscribe function."""
        return self._state_listeners.subscribe(listener)

    def on_event_change(self, listener: EventListener[EventT]) -> Callable[[], None]:
        """Subscribe to ``(event, index)`` whenever the cursor lands on an event."""
        return self._event_listeners.subscribe(listener)

    def destroy(self) -> None:
        """Stop the timer and drop listeners and events."""
        self._stop_interval()
        self._is_playing = False
        self._state_listeners.clear()
        self._event_listeners.clear()
        self._events = []

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def _start_interval(self) -> None:
        interval = self._speed.interval_seconds
        # A scheduler error leaves the previous timer (if any) untouched
        timer = self._scheduler.start_repeating(interval, self._on_tick)
        self._stop_interval()
        self._timer = timer
        logger.debug("Started playback timer (%.3fs, %s)", interval, self._speed.label)

    def _stop_interval(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("Stopped playback timer")

    def _on_tick(self) -> None:
        self.next()
        # Stop on the final event instead of waiting another tick
        if self._current_index == len(self._events) - 1:
            self.pause()

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit_current_event(self) -> None:
        event = self.get_current_event()
        if event is not None:
            self._event_listeners.emit(event, self._current_index)
        self._emit_state()

    def _emit_state(self) -> None:
        self._state_listeners.emit(self.get_state())
