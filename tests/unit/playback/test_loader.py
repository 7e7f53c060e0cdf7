"""Tests for event loading and normalization."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gitgallery.errors import ErrorCategory, EventLoadError
from gitgallery.playback.loader import (
    format_timestamp,
    load_events,
    normalize_event,
    parse_events,
)


FEED_RECORD = {
    "timestampMs": 1717000000000,
    "timestamp": "2024-05-29T16:26:40.000Z",
    "eventType": "tool_call",
    "toolName": "Read",
    "sessionId": "s-1",
    "repoOwner": "octo",
    "repoName": "demo",
    "isPublic": True,
}


class TestFormatTimestamp:
    def test_millisecond_precision(self) -> None:
        assert format_timestamp(1717000000123) == "2024-05-29T16:26:40.123Z"

    def test_epoch(self) -> None:
        assert format_timestamp(0) == "1970-01-01T00:00:00.000Z"


class TestNormalizeEvent:
    def test_feed_record(self) -> None:
        event = normalize_event(FEED_RECORD)
        assert event.timestamp_ms == 1717000000000
        assert event.timestamp == "2024-05-29T16:26:40.000Z"
        assert event.event_type == "tool_call"
        assert event.tool_name == "Read"
        assert event.session_id == "s-1"
        assert event.repo_full_name == "octo/demo"
        assert event.extra == {"isPublic": True}

    def test_snake_case_keys(self) -> None:
        event = normalize_event({
            "timestamp_ms": 5000,
            "event_type": "file_edit",
            "tool_name": "Edit",
            "file_path": "src/app.py",
        })
        assert event.timestamp_ms == 5000
        assert event.event_type == "file_edit"
        assert event.file_paths == ["src/app.py"]
        assert event.extra == {}

    def test_numeric_timestamp_is_seconds(self) -> None:
        event = normalize_event({"timestamp": 1717000000})
        assert event.timestamp_ms == 1717000000000
        assert event.timestamp == "2024-05-29T16:26:40.000Z"

    def test_iso_timestamp(self) -> None:
        event = normalize_event({"timestamp": "2024-05-29T16:26:40.250Z"})
        assert event.timestamp_ms == 1717000000250

    def test_naive_iso_is_utc(self) -> None:
        event = normalize_event({"timestamp": "2024-05-29T16:26:40"})
        assert event.timestamp_ms == 1717000000000

    def test_explicit_ms_wins(self) -> None:
        event = normalize_event({"timestamp": "1999-01-01T00:00:00Z", "timestampMs": 1000})
        assert event.timestamp_ms == 1000
        assert event.timestamp == "1970-01-01T00:00:01.000Z"

    def test_file_paths_list(self) -> None:
        event = normalize_event({"timestamp": 1, "filePaths": ["a.py", "", "b.py"]})
        assert event.file_paths == ["a.py", "b.py"]

    def test_unknown_fields_pass_through(self) -> None:
        payload = {"nested": {"k": [1, 2]}}
        event = normalize_event({"timestamp": 1, "payload": payload})
        assert event.extra["payload"] is payload

    def test_missing_timestamp(self) -> None:
        with pytest.raises(EventLoadError, match="Event 4 has no timestamp") as exc_info:
            normalize_event({"eventType": "x"}, index=4)
        assert exc_info.value.index == 4
        assert exc_info.value.category == ErrorCategory.EVENT_SOURCE

    def test_bad_iso(self) -> None:
        with pytest.raises(EventLoadError, match="invalid timestamp"):
            normalize_event({"timestamp": "yesterday"})

    def test_not_an_object(self) -> None:
        with pytest.raises(EventLoadError, match="must be an object"):
            normalize_event(["timestamp"])  # type: ignore[arg-type]


class TestParseEvents:
    def test_list(self) -> None:
        events = parse_events([{"timestamp": 3}, {"timestamp": 1}, {"timestamp": 2}])
        # File order is kept
        assert [e.timestamp_ms for e in events] == [3000, 1000, 2000]

    def test_feed_response(self) -> None:
        events = parse_events({"events": [FEED_RECORD], "count": 1, "timeWindow": "24 hours"})
        assert len(events) == 1

    def test_feed_without_events(self) -> None:
        with pytest.raises(EventLoadError, match="'events'"):
            parse_events({"count": 0})

    def test_not_a_list(self) -> None:
        with pytest.raises(EventLoadError, match="Expected a list"):
            parse_events("nope")


class TestLoadEvents:
    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(json.dumps({"events": [FEED_RECORD, {**FEED_RECORD, "toolName": "Edit"}]}))
        events = load_events(path)
        assert [e.tool_name for e in events] == ["Read", "Edit"]

    def test_jsonl_file(self, tmp_path: Path) -> None:
        path = tmp_path / "events.jsonl"
        path.write_text(
            json.dumps({"timestamp": 1}) + "\n\n" + json.dumps({"timestamp": 2}) + "\n"
        )
        events = load_events(path)
        assert [e.timestamp_ms for e in events] == [1000, 2000]

    def test_filters(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(json.dumps([
            {"timestamp": 1, "sessionId": "a", "eventType": "read"},
            {"timestamp": 2, "sessionId": "b", "eventType": "read"},
            {"timestamp": 3, "sessionId": "a", "eventType": "edit"},
        ]))
        assert [e.timestamp_ms for e in load_events(path, session_id="a")] == [1000, 3000]
        assert [e.timestamp_ms for e in load_events(path, session_id="a", event_type="edit")] == [3000]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(EventLoadError, match="Cannot read") as exc_info:
            load_events(tmp_path / "nope.json")
        assert exc_info.value.source is not None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text("{not json")
        with pytest.raises(EventLoadError, match="invalid JSON"):
            load_events(path)

    def test_invalid_jsonl_line(self, tmp_path: Path) -> None:
        path = tmp_path / "events.ndjson"
        path.write_text('{"timestamp": 1}\n{oops\n')
        with pytest.raises(EventLoadError, match=":2: invalid JSON"):
            load_events(path)

    def test_bad_record_reports_source(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{"timestamp": 1}, {}]))
        with pytest.raises(EventLoadError) as exc_info:
            load_events(path)
        assert exc_info.value.index == 1
        assert exc_info.value.source == str(path)
