"""Load session events for playback.

Reads exports of the agent-events timeline feed.  The feed stores
timestamps as epoch seconds and returns records shaped like::

    {"timestampMs": 1717000000000, "timestamp": "2024-05-29T16:26:40.000Z",
     "eventType": "tool_call", "toolName": "Read", "sessionId": "abc",
     "repoOwner": "octo", "repoName": "demo"}

Both the bare list and the feed response (``{"events": [...], "count": ...}``)
are accepted, as JSON or JSON Lines.  File order is playback order; nothing
here sorts.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from gitgallery.errors import EventLoadError
from gitgallery.types.playback import PlaybackEvent

logger = logging.getLogger(__name__)

JSONL_SUFFIXES = frozenset({".jsonl", ".ndjson"})

# Known fields: attribute name -> accepted keys, first match wins
_FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "event_type": ("eventType", "event_type"),
    "tool_name": ("toolName", "tool_name"),
    "session_id": ("sessionId", "session_id"),
    "repo_owner": ("repoOwner", "repo_owner"),
    "repo_name": ("repoName", "repo_name"),
}
_TIMESTAMP_MS_KEYS = ("timestampMs", "timestamp_ms")
_FILE_LIST_KEYS = ("filePaths", "file_paths")
_FILE_KEYS = ("filePath", "file_path")
_CONSUMED_KEYS = frozenset(
    {"timestamp", *_TIMESTAMP_MS_KEYS, *_FILE_LIST_KEYS, *_FILE_KEYS}
    | {k for keys in _FIELD_KEYS.values() for k in keys}
)


def _first(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def format_timestamp(timestamp_ms: int) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{timestamp_ms % 1000:03d}Z"


def _parse_iso(value: str) -> int:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return round(dt.timestamp() * 1000)


def _resolve_timestamp_ms(raw: Mapping[str, Any], index: int) -> int:
    explicit = _first(raw, _TIMESTAMP_MS_KEYS)
    timestamp = raw.get("timestamp")
    try:
        if explicit is not None and not isinstance(explicit, bool):
            return int(float(explicit))
        if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
            # Feed timestamps are epoch seconds
            return round(timestamp * 1000)
        if isinstance(timestamp, str) and timestamp.strip():
            return _parse_iso(timestamp)
    except (TypeError, ValueError, OverflowError) as exc:
        raise EventLoadError(
            f"Event {index} has an invalid timestamp: {exc}", index=index,
        ) from exc
    raise EventLoadError(f"Event {index} has no timestamp", index=index)


def _resolve_file_paths(raw: Mapping[str, Any]) -> list[str]:
    paths = _first(raw, _FILE_LIST_KEYS)
    if isinstance(paths, (list, tuple)):
        return [str(p) for p in paths if p]
    single = _first(raw, _FILE_KEYS)
    return [str(single)] if single else []


def normalize_event(raw: Mapping[str, Any], *, index: int = 0) -> PlaybackEvent:
    """Build a ``PlaybackEvent`` from one feed record."""
    if not isinstance(raw, Mapping):
        raise EventLoadError(
            f"Event {index} must be an object, got {type(raw).__name__}", index=index,
        )

    timestamp_ms = _resolve_timestamp_ms(raw, index)
    fields = {attr: _first(raw, keys) for attr, keys in _FIELD_KEYS.items()}
    for attr, value in fields.items():
        if value is not None:
            fields[attr] = str(value)

    return PlaybackEvent(
        timestamp=format_timestamp(timestamp_ms),
        timestamp_ms=timestamp_ms,
        file_paths=_resolve_file_paths(raw),
        extra={k: v for k, v in raw.items() if k not in _CONSUMED_KEYS},
        **fields,
    )


def parse_events(payload: Any) -> list[PlaybackEvent]:
    """Normalize a decoded list of records or a feed response object."""
    if isinstance(payload, Mapping):
        records = payload.get("events")
        if records is None:
            raise EventLoadError("Expected an 'events' list in the feed response")
    else:
        records = payload
    if not isinstance(records, list):
        raise EventLoadError(f"Expected a list of events, got {type(records).__name__}")
    return [normalize_event(raw, index=i) for i, raw in enumerate(records)]


def _read_jsonl(text: str, source: str) -> list[Any]:
    records: list[Any] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise EventLoadError(
                f"{source}:{lineno}: invalid JSON: {exc.msg}", source=source,
            ) from exc
    return records


def load_events(
    path: str | Path,
    *,
    session_id: str | None = None,
    event_type: str | None = None,
) -> list[PlaybackEvent]:
    """Read events from a ``.json`` or ``.jsonl`` export, in file order."""
    p = Path(path)
    source = str(p)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise EventLoadError(f"Cannot read {source}: {exc}", source=source) from exc

    if p.suffix.lower() in JSONL_SUFFIXES:
        payload: Any = _read_jsonl(text, source)
    else:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EventLoadError(
                f"{source}: invalid JSON: {exc.msg} (line {exc.lineno})", source=source,
            ) from exc

    try:
        events = parse_events(payload)
    except EventLoadError as exc:
        exc.source = source
        raise

    if session_id is not None:
        events = [e for e in events if e.session_id == session_id]
    if event_type is not None:
        events = [e for e in events if e.event_type == event_type]

    logger.debug("Loaded %d events from %s", len(events), source)
    return events
