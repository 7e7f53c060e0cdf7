"""Configuration loading and management."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from gitgallery.errors import ConfigurationError
from gitgallery.types.playback import PlaybackSpeed


# Load .env files
load_dotenv()

# Config directory names
PROJECT_DIR = ".gitgallery"
USER_DIR_NAME = ".gitgallery"

CONFIG_FILE_NAMES = ("config.json", "config.yaml", "config.yml")


@dataclass(slots=True)
class PlaybackConfig:
    """Merged configuration from all sources.

    Priority: CLI args > env vars > project config > user config > defaults
    """

    speed: float = PlaybackSpeed.NORMAL.value
    autoplay: bool = False
    tui: bool = True
    session_id: str | None = None
    event_type: str | None = None

    # Logging
    debug: bool = False
    json_logs: bool = False

    @property
    def playback_speed(self) -> PlaybackSpeed:
        return PlaybackSpeed(self.speed)


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by looking for .gitgallery/ or .git/."""
    current = start or Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / PROJECT_DIR).exists():
            return parent
        if (parent / ".git").exists():
            return parent
    return None


def get_user_config_dir() -> Path:
    """Get the user-level config directory (~/.gitgallery/)."""
    return Path.home() / USER_DIR_NAME


def load_json_config(path: Path) -> dict[str, Any]:
    """Load a JSON config file, returning empty dict if not found."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (json.JSONDecodeError, OSError):
        return {}


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load a YAML config file, returning empty dict if not found."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (yaml.YAMLError, OSError):
        return {}


def load_config_dir(directory: Path) -> dict[str, Any]:
    """Merge every config file in *directory*; later names win."""
    merged: dict[str, Any] = {}
    for name in CONFIG_FILE_NAMES:
        path = directory / name
        if name.endswith(".json"):
            merged.update(load_json_config(path))
        else:
            merged.update(load_yaml_config(path))
    return merged


def _env_flag(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


def load_config(
    *,
    cli_args: dict[str, Any] | None = None,
    working_dir: str | None = None,
) -> PlaybackConfig:
    """Load configuration from all sources with proper priority.

    Priority: CLI args > env vars > project config > user config > defaults
    """
    config = PlaybackConfig()
    cli_args = cli_args or {}

    # 1. User-level config (~/.gitgallery/)
    _apply_dict(config, load_config_dir(get_user_config_dir()))

    # 2. Project-level config (.gitgallery/)
    project_root = find_project_root(Path(working_dir or os.getcwd()))
    if project_root:
        _apply_dict(config, load_config_dir(project_root / PROJECT_DIR))

    # 3. Environment variables
    if speed := os.environ.get("GITGALLERY_SPEED"):
        config.speed = speed  # type: ignore[assignment]
    if autoplay := os.environ.get("GITGALLERY_AUTOPLAY"):
        config.autoplay = _env_flag(autoplay)
    if debug := os.environ.get("GITGALLERY_DEBUG"):
        config.debug = _env_flag(debug)

    # 4. CLI args (highest priority)
    _apply_dict(config, cli_args)

    config.speed = _validate_speed(config.speed)
    return config


def _validate_speed(value: Any) -> float:
    try:
        return PlaybackSpeed(float(value)).value
    except (TypeError, ValueError):
        options = ", ".join(s.label for s in PlaybackSpeed)
        raise ConfigurationError(
            f"Invalid playback speed {value!r} (expected one of {options})"
        ) from None


_BOOL_FIELDS = frozenset({"autoplay", "tui", "debug", "json_logs"})


def _apply_dict(config: PlaybackConfig, data: dict[str, Any]) -> None:
    """Apply dictionary values to config, only for known fields."""
    field_map = {
        "speed": "speed",
        "autoplay": "autoplay",
        "tui": "tui",
        "session_id": "session_id",
        "event_type": "event_type",
        "debug": "debug",
        "json_logs": "json_logs",
        # Aliases from JSON config
        "sessionId": "session_id",
        "eventType": "event_type",
        "jsonLogs": "json_logs",
    }
    for key, attr in field_map.items():
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if attr in _BOOL_FIELDS and isinstance(value, str):
            value = _env_flag(value)
        setattr(config, attr, value)
