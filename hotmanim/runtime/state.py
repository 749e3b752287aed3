"""Mutable UI state shared by the input handlers, the loop and frame drawing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..picker_panel import DirectoryPicker
from ..quality import Quality
from ..session.command import Size
from ..watch.debounce import DebounceFilter


class Chord(Enum):
    """Second-key actions reachable after the chord prefix."""

    FILE_PICKER = "file_picker"
    RE_RENDER = "re_render"
    MOVE = "move"
    SET_QUALITY = "set_quality"


class Mode(Enum):
    IDLE = "idle"
    AWAITING_CHORD = "awaiting_chord"
    QUALITY_MENU = "quality_menu"
    FILE_PICKER = "file_picker"


@dataclass
class AppState:
    directory: Path
    size: Size
    quality: Quality = Quality.LOW
    chord_pending: bool = False
    chord: Chord | None = None
    picker: DirectoryPicker | None = None
    debounce: DebounceFilter = field(default_factory=DebounceFilter)
    status_message: str = ""
    status_message_until: float = 0.0
    status_is_error: bool = False

    @property
    def mode(self) -> Mode:
        if self.picker is not None:
            return Mode.FILE_PICKER
        if self.chord_pending:
            return Mode.AWAITING_CHORD
        if self.chord is Chord.SET_QUALITY:
            return Mode.QUALITY_MENU
        return Mode.IDLE

    @property
    def last_file(self) -> str:
        return self.debounce.last_name
