"""Shared test helpers for the gitgallery test suite."""

from __future__ import annotations

from tests.helpers.fixtures import ManualScheduler, make_event, make_events

__all__ = ["ManualScheduler", "make_event", "make_events"]
