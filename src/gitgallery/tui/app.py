"""Textual TUI for stepping through session events."""

from __future__ import annotations

from typing import Any, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from gitgallery.playback.scheduler import TextualScheduler
from gitgallery.playback.service import EventPlaybackService
from gitgallery.tui.events import PlaybackEventChanged, PlaybackStateChanged
from gitgallery.tui.widgets.event_list import EventList, event_label
from gitgallery.tui.widgets.playback_controls import PlaybackControls
from gitgallery.types.playback import PlaybackEvent, PlaybackSpeed


def render_event_detail(event: Any) -> Text:
    """Key/value view of the current event."""
    text = Text()
    if event is None:
        text.append("Press space to start playback", style="dim")
        return text

    if not isinstance(event, PlaybackEvent):
        text.append(event_label(event))
        return text

    rows: list[tuple[str, str]] = [("time", event.timestamp)]
    if event.event_type:
        rows.append(("event", event.event_type))
    if event.tool_name:
        rows.append(("tool", event.tool_name))
    if event.session_id:
        rows.append(("session", event.session_id))
    if event.repo_full_name:
        rows.append(("repo", event.repo_full_name))
    rows.extend(("file", path) for path in event.file_paths)
    rows.extend((key, str(value)) for key, value in event.extra.items())

    for i, (key, value) in enumerate(rows):
        text.append(f"{key:>10} ", style="bold cyan")
        text.append(value)
        if i < len(rows) - 1:
            text.append("\n")
    return text


class PlaybackApp(App):
    """Replays a session's events with keyboard transport controls."""

    TITLE = "Git Gallery Playback"

    CSS = """
    #event-detail {
        height: auto;
        min-height: 3;
        padding: 0 1;
        border: solid $surface-lighten-1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("space", "toggle_play", "Play/Pause", show=True),
        Binding("right", "next_event", "Next", show=True),
        Binding("left", "previous_event", "Prev", show=True),
        Binding("home", "go_start", "Start", show=False),
        Binding("end", "go_end", "End", show=False),
        Binding("r", "reset", "Reset", show=True),
        Binding("1", "set_speed(0.5)", "0.5x", show=False),
        Binding("2", "set_speed(1)", "1x", show=False),
        Binding("3", "set_speed(2)", "2x", show=False),
        Binding("4", "set_speed(5)", "5x", show=False),
    ]

    def __init__(
        self,
        events: Sequence[Any] | None = None,
        *,
        speed: PlaybackSpeed = PlaybackSpeed.NORMAL,
        autoplay: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._playback_events: Sequence[Any] = events or []
        self._autoplay = autoplay
        self.playback: EventPlaybackService[Any] = EventPlaybackService(
            self._playback_events,
            scheduler=TextualScheduler(self),
            speed=speed,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield EventList(id="event-list")
        yield Static("", id="event-detail")
        yield PlaybackControls(id="playback-controls")
        yield Footer()

    def on_mount(self) -> None:
        self.playback.on_state_change(
            lambda state: self.post_message(PlaybackStateChanged(state))
        )
        self.playback.on_event_change(
            lambda event, index: self.post_message(PlaybackEventChanged(event, index))
        )

        self.query_one("#event-list", EventList).set_events(self._playback_events)
        self._show_state(self.playback.get_state())
        if self._autoplay:
            self.playback.play()

    def on_unmount(self) -> None:
        self.playback.destroy()

    # ------------------------------------------------------------------
    # Controller notifications
    # ------------------------------------------------------------------

    def on_playback_state_changed(self, message: PlaybackStateChanged) -> None:
        self._show_state(message.state)

    def on_playback_event_changed(self, message: PlaybackEventChanged) -> None:
        self.sub_title = f"{message.index + 1} / {self.playback.total_events}"

    def _show_state(self, state: Any) -> None:
        self.query_one("#playback-controls", PlaybackControls).update_state(state)
        self.query_one("#event-list", EventList).current_index = state.current_index
        self.query_one("#event-detail", Static).update(
            render_event_detail(state.current_event)
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_toggle_play(self) -> None:
        self.playback.toggle_play_pause()

    def action_next_event(self) -> None:
        self.playback.next()

    def action_previous_event(self) -> None:
        self.playback.previous()

    def action_go_start(self) -> None:
        self.playback.go_to_start()

    def action_go_end(self) -> None:
        self.playback.go_to_end()

    def action_reset(self) -> None:
        self.playback.reset()

    def action_set_speed(self, speed: float) -> None:
        self.playback.set_speed(speed)
