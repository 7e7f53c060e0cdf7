"""Tests for playback types."""

from __future__ import annotations

import pytest

from gitgallery.types.playback import (
    BASE_INTERVAL_MS,
    SPEED_OPTIONS,
    PlaybackEvent,
    PlaybackSpeed,
    PlaybackState,
)


class TestPlaybackSpeed:
    def test_options(self) -> None:
        assert [s.value for s in SPEED_OPTIONS] == [0.5, 1.0, 2.0, 5.0]

    @pytest.mark.parametrize(
        ("speed", "ms"),
        [(PlaybackSpeed.HALF, 2000), (PlaybackSpeed.NORMAL, 1000), (PlaybackSpeed.DOUBLE, 500), (PlaybackSpeed.FAST, 200)],
    )
    def test_interval(self, speed: PlaybackSpeed, ms: float) -> None:
        assert speed.interval_ms == pytest.approx(ms)
        assert speed.interval_seconds == pytest.approx(ms / 1000)
        assert BASE_INTERVAL_MS / speed.value == pytest.approx(ms)

    def test_lookup_by_number(self) -> None:
        assert PlaybackSpeed(5) is PlaybackSpeed.FAST
        with pytest.raises(ValueError):
            PlaybackSpeed(3)

    def test_label(self) -> None:
        assert PlaybackSpeed.HALF.label == "0.5x"
        assert PlaybackSpeed.DOUBLE.label == "2x"


class TestPlaybackState:
    def _state(self, index: int, total: int) -> PlaybackState[None]:
        return PlaybackState(
            is_playing=False,
            current_index=index,
            total_events=total,
            speed=PlaybackSpeed.NORMAL,
            current_event=None,
        )

    def test_display_position(self) -> None:
        assert self._state(-1, 3).display_position == 0
        assert self._state(0, 3).display_position == 1
        assert self._state(2, 3).display_position == 3

    def test_step_flags(self) -> None:
        idle = self._state(-1, 3)
        assert not idle.can_step_back
        assert idle.can_step_forward
        last = self._state(2, 3)
        assert last.can_step_back
        assert not last.can_step_forward
        empty = self._state(-1, 0)
        assert not empty.can_step_forward

    def test_frozen(self) -> None:
        state = self._state(0, 1)
        with pytest.raises(AttributeError):
            state.current_index = 1  # type: ignore[misc]


class TestPlaybackEvent:
    def test_label_with_files(self) -> None:
        event = PlaybackEvent(
            timestamp="2024-05-29T16:26:40.000Z",
            timestamp_ms=1717000000000,
            event_type="tool_call",
            tool_name="Read",
            file_paths=["a.py", "b.py"],
        )
        assert event.label == "2024-05-29T16:26:40.000Z tool_call Read a.py (+1)"

    def test_label_with_repo(self) -> None:
        event = PlaybackEvent(
            timestamp="t", timestamp_ms=0, repo_owner="octo", repo_name="demo",
        )
        assert event.label == "t octo/demo"

    def test_repo_full_name_needs_both(self) -> None:
        assert PlaybackEvent(timestamp="t", timestamp_ms=0, repo_owner="octo").repo_full_name is None
