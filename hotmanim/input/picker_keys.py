"""Picker-mode keyboard handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..runtime.state import AppState

PICKER_QUIT_KEY = "q"
PICKER_CONFIRM_KEY = " "
PICKER_CANCEL_KEY = "ESC"


@dataclass(frozen=True)
class PickerKeyCallbacks:
    """External operations required for picker key handling."""

    commit_directory: Callable[[Path], None]


def handle_picker_key(key: str, state: AppState, callbacks: PickerKeyCallbacks) -> tuple[bool, bool]:
    """Handle one key while the directory picker is open.

    Returns ``(handled, should_quit)`` so the main loop can stop event
    propagation and optionally terminate the application.
    """
    picker = state.picker
    if picker is None:
        return False, False

    if key == PICKER_QUIT_KEY:
        return True, True
    if key == PICKER_CONFIRM_KEY:
        state.picker = None
        state.chord = None
        callbacks.commit_directory(picker.cwd)
        return True, False
    if key == PICKER_CANCEL_KEY:
        state.picker = None
        state.chord = None
        return True, False

    if key in {"j", "DOWN"}:
        picker.move(1)
    elif key in {"k", "UP"}:
        picker.move(-1)
    elif key in {"l", "RIGHT", "ENTER"}:
        picker.enter()
    elif key in {"h", "LEFT", "BACKSPACE"}:
        picker.leave()
    elif key in {"g", "HOME"}:
        picker.jump(0)
    elif key in {"G", "END"}:
        picker.jump(-1)
    elif key == ".":
        picker.toggle_hidden()
    return True, False
