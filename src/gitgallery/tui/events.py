"""Custom Textual Messages for playback notifications."""

from __future__ import annotations

from typing import Any

from textual.message import Message

from gitgallery.types.playback import PlaybackState


class PlaybackStateChanged(Message):
    """The playback controller changed state."""

    def __init__(self, state: PlaybackState[Any]) -> None:
        super().__init__()
        self.state = state


class PlaybackEventChanged(Message):
    """The playback cursor landed on an event."""

    def __init__(self, event: Any, index: int) -> None:
        super().__init__()
        self.event = event
        self.index = index
