"""Read-only JSON configuration.

Supplies the renderer command, preview player, and loop timings.
All access is defensive: malformed or missing config falls back safely.
Nothing is ever written back.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..session.command import DEFAULT_PREVIEW_COMMAND, DEFAULT_RENDERER
from ..watch.debounce import DEBOUNCE_SECONDS

APP_NAME = "hotmanim"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_TICK_MS = 10


@dataclass(frozen=True)
class AppConfig:
    renderer: str = DEFAULT_RENDERER
    preview_command: str = DEFAULT_PREVIEW_COMMAND
    tick_ms: int = DEFAULT_TICK_MS
    debounce_ms: int = int(DEBOUNCE_SECONDS * 1000)

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


def load_config_data(path: Path = DEFAULT_CONFIG_PATH) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _string_value(data: dict[str, object], key: str, default: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _int_value(data: dict[str, object], key: str, default: int, minimum: int) -> int:
    """Accept plain integers at or above ``minimum``; booleans are rejected."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value >= minimum else default


def load_config(path: Path | None = None) -> AppConfig:
    data = load_config_data(DEFAULT_CONFIG_PATH if path is None else path)
    return AppConfig(
        renderer=_string_value(data, "renderer", DEFAULT_RENDERER),
        preview_command=_string_value(data, "preview_command", DEFAULT_PREVIEW_COMMAND),
        tick_ms=_int_value(data, "tick_ms", DEFAULT_TICK_MS, minimum=1),
        debounce_ms=_int_value(data, "debounce_ms", int(DEBOUNCE_SECONDS * 1000), minimum=0),
    )
