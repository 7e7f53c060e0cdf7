"""Playback types.

Events, speeds and the state snapshot handed to playback subscribers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

# Base tick: one event per second at 1x
BASE_INTERVAL_MS = 1000

EventT = TypeVar("EventT")


class PlaybackSpeed(float, Enum):
    """Multiplier on the base tick rate."""

    HALF = 0.5
    NORMAL = 1.0
    DOUBLE = 2.0
    FAST = 5.0

    @property
    def interval_ms(self) -> float:
        return BASE_INTERVAL_MS / self.value

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000

    @property
    def label(self) -> str:
        """Short display form, e.g. ``0.5x`` or ``2x``."""
        return f"{self.value:g}x"


SPEED_OPTIONS: tuple[PlaybackSpeed, ...] = tuple(PlaybackSpeed)


@dataclass(slots=True)
class PlaybackEvent:
    """A normalized agent event from the timeline feed.

    Only ``timestamp`` and ``timestamp_ms`` are required; everything the
    feed carries beyond the known fields is kept in ``extra`` untouched.
    """

    timestamp: str
    timestamp_ms: int
    event_type: str | None = None
    tool_name: str | None = None
    session_id: str | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    file_paths: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def repo_full_name(self) -> str | None:
        if self.repo_owner and self.repo_name:
            return f"{self.repo_owner}/{self.repo_name}"
        return None

    @property
    def label(self) -> str:
        """One-line description used by the console and TUI views."""
        parts = [self.timestamp]
        if self.event_type:
            parts.append(self.event_type)
        if self.tool_name:
            parts.append(self.tool_name)
        if self.file_paths:
            first = self.file_paths[0]
            more = len(self.file_paths) - 1
            parts.append(f"{first} (+{more})" if more else first)
        elif self.repo_full_name:
            parts.append(self.repo_full_name)
        return " ".join(parts)


@dataclass(frozen=True, slots=True)
class PlaybackState(Generic[EventT]):
    """Snapshot of the controller at the moment of a transition."""

    is_playing: bool
    current_index: int
    total_events: int
    speed: PlaybackSpeed
    current_event: EventT | None

    @property
    def display_position(self) -> int:
        """1-based position for display, 0 before playback starts."""
        return self.current_index + 1 if self.current_index >= 0 else 0

    @property
    def can_step_back(self) -> bool:
        return self.current_index > 0

    @property
    def can_step_forward(self) -> bool:
        return self.current_index < self.total_events - 1
