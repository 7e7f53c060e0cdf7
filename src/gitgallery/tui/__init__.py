"""Textual TUI for session event playback."""

from gitgallery.tui.app import PlaybackApp, render_event_detail
from gitgallery.tui.events import PlaybackEventChanged, PlaybackStateChanged

__all__ = [
    "PlaybackApp",
    "render_event_detail",
    "PlaybackEventChanged",
    "PlaybackStateChanged",
]
