"""Playback TUI widgets."""

from gitgallery.tui.widgets.event_list import EventList
from gitgallery.tui.widgets.playback_controls import PlaybackControls

__all__ = [
    "EventList",
    "PlaybackControls",
]
