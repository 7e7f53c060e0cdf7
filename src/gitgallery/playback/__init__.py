"""Session event playback: controller, timers and event loading."""

from gitgallery.playback.listeners import ListenerSet
from gitgallery.playback.loader import (
    load_events,
    normalize_event,
    parse_events,
)
from gitgallery.playback.scheduler import (
    AsyncioScheduler,
    Scheduler,
    TextualScheduler,
    TimerHandle,
)
from gitgallery.playback.service import EventPlaybackService

__all__ = [
    # listeners
    "ListenerSet",
    # loader
    "load_events",
    "normalize_event",
    "parse_events",
    # scheduler
    "AsyncioScheduler",
    "Scheduler",
    "TextualScheduler",
    "TimerHandle",
    # service
    "EventPlaybackService",
]
