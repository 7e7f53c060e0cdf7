"""Global test fixtures for gitgallery."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from gitgallery.playback.service import EventPlaybackService
from gitgallery.types.playback import PlaybackEvent
from tests.helpers.fixtures import ManualScheduler, make_events


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock driving playback ticks."""
    return ManualScheduler()


@pytest.fixture
def three_events() -> list[PlaybackEvent]:
    return make_events(3)


@pytest.fixture
def service(
    scheduler: ManualScheduler, three_events: list[PlaybackEvent],
) -> Iterator[EventPlaybackService[PlaybackEvent]]:
    svc: EventPlaybackService[PlaybackEvent] = EventPlaybackService(
        three_events, scheduler=scheduler,
    )
    yield svc
    svc.destroy()
