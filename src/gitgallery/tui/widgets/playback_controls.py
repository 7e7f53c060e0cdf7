"""Playback controls: position, speed selector and transport row."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from gitgallery.types.playback import SPEED_OPTIONS, PlaybackSpeed, PlaybackState

_ICON_START = "\u23ee"   # ⏮
_ICON_PREV = "\u25c0"    # ◀
_ICON_PLAY = "\u25b6"    # ▶
_ICON_PAUSE = "\u23f8"   # ⏸
_ICON_NEXT = "\u25b6"    # ▶
_ICON_END = "\u23ed"     # ⏭
_PLAYING_DOT = "\u25cf"  # ●


def _button(text: Text, label: str, *, enabled: bool, style: str = "") -> None:
    if enabled:
        text.append(f" {label} ", style=style or "bold")
    else:
        text.append(f" {label} ", style="dim")


def render_controls(state: PlaybackState[Any]) -> Text:
    """Render the two control lines for *state*.

    Empty sequences render nothing.
    """
    text = Text()
    if state.total_events == 0:
        return text

    # Line 1: position, playing indicator, speed options
    text.append(f" {state.display_position} / {state.total_events}", style="bold")
    if state.is_playing:
        text.append(f" {_PLAYING_DOT}", style="green")
    text.append("   ")
    for option in SPEED_OPTIONS:
        if option is state.speed:
            text.append(f" {option.label} ", style="reverse bold")
        else:
            text.append(f" {option.label} ", style="dim")
    text.append("\n")

    # Line 2: transport buttons
    back = state.can_step_back
    forward = state.can_step_forward
    _button(text, _ICON_START, enabled=back)
    _button(text, _ICON_PREV, enabled=back)
    if state.is_playing:
        _button(text, f"{_ICON_PAUSE} Pause", enabled=True, style="black on yellow")
    else:
        _button(text, f"{_ICON_PLAY} Play", enabled=True, style="black on cyan")
    _button(text, _ICON_NEXT, enabled=forward)
    _button(text, _ICON_END, enabled=forward)
    return text


class PlaybackControls(Static):
    """Shows where playback is and which transport actions apply."""

    DEFAULT_CSS = """
    PlaybackControls {
        height: auto;
        min-height: 2;
        padding: 0 1;
        border: solid $surface-lighten-1;
    }
    """

    is_playing: reactive[bool] = reactive(False)
    current_index: reactive[int] = reactive(-1)
    total_events: reactive[int] = reactive(0)
    speed: reactive[float] = reactive(PlaybackSpeed.NORMAL.value)

    def update_state(self, state: PlaybackState[Any]) -> None:
        self.is_playing = state.is_playing
        self.current_index = state.current_index
        self.total_events = state.total_events
        self.speed = state.speed.value

    @property
    def state(self) -> PlaybackState[Any]:
        return PlaybackState(
            is_playing=self.is_playing,
            current_index=self.current_index,
            total_events=self.total_events,
            speed=PlaybackSpeed(self.speed),
            current_event=None,
        )

    def render(self) -> Text:
        return render_controls(self.state)
