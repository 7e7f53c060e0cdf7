"""Event list with the current playback event highlighted."""

from __future__ import annotations

from typing import Any, Sequence

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

_MARKER = "\u25b8"  # ▸


def event_label(event: Any) -> str:
    """Best available one-line label for an opaque event."""
    label = getattr(event, "label", None)
    if isinstance(label, str):
        return label
    if isinstance(event, dict):
        return str(event.get("timestamp", event))
    return str(event)


def visible_window(total: int, current: int, height: int) -> range:
    """Indices to show so that *current* stays roughly centered."""
    if total <= height:
        return range(total)
    start = max(0, current - height // 2)
    start = min(start, total - height)
    return range(start, start + height)


class EventList(Static):
    """Scrolling window over the loaded events."""

    DEFAULT_CSS = """
    EventList {
        height: 1fr;
        min-height: 4;
        padding: 0 1;
        border: solid $surface-lighten-1;
    }
    """

    current_index: reactive[int] = reactive(-1)

    def __init__(self, window: int = 15, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._labels: list[str] = []
        self._window_size = window

    @property
    def labels(self) -> list[str]:
        return list(self._labels)

    def set_events(self, events: Sequence[Any]) -> None:
        self._labels = [event_label(e) for e in events]
        self.current_index = -1
        self.refresh()

    def render(self) -> Text:
        if not self._labels:
            return Text("(no events loaded)", style="dim")

        text = Text()
        rows = visible_window(len(self._labels), self.current_index, self._window_size)
        for i in rows:
            if i == self.current_index:
                text.append(f"{_MARKER} {i + 1:>4}  {self._labels[i]}", style="reverse bold")
            else:
                text.append(f"  {i + 1:>4}  {self._labels[i]}", style="dim" if i > self.current_index else "")
            if i != rows[-1]:
                text.append("\n")
        return text
