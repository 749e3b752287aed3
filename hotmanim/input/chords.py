"""Chord-based key handling for the main (non-picker) view.

A prefix key arms the chord; the next key selects one ``Chord``. The
quality chord consumes one further key to pick a ``Quality``. A selected
chord tag lives until the next key event clears it.
"""

from __future__ import annotations

from enum import Enum

from ..picker_panel import DirectoryPicker
from ..quality import Quality
from ..runtime.state import AppState, Chord

QUIT_KEY = "q"
CHORD_PREFIX_KEY = " "

CHORD_KEYS: dict[str, Chord] = {
    "f": Chord.FILE_PICKER,
    "q": Chord.SET_QUALITY,
    "r": Chord.RE_RENDER,
    "m": Chord.MOVE,
}


class KeyAction(Enum):
    """Side effects the application loop performs after a key."""

    NONE = "none"
    QUIT = "quit"
    OPEN_PICKER = "open_picker"
    RE_RENDER = "re_render"
    RELOCATE = "relocate"


_CHORD_ACTIONS: dict[Chord, KeyAction] = {
    Chord.FILE_PICKER: KeyAction.OPEN_PICKER,
    Chord.RE_RENDER: KeyAction.RE_RENDER,
    Chord.MOVE: KeyAction.RELOCATE,
}


def handle_chord_key(key: str, state: AppState) -> KeyAction:
    """Advance the chord state machine by one key press."""
    if state.chord_pending:
        state.chord_pending = False
        state.chord = CHORD_KEYS.get(key)
        if state.chord is None:
            return KeyAction.NONE
        if state.chord is Chord.FILE_PICKER:
            state.picker = DirectoryPicker(state.directory)
        return _CHORD_ACTIONS.get(state.chord, KeyAction.NONE)

    chord, state.chord = state.chord, None
    if chord is Chord.SET_QUALITY:
        state.quality = Quality.for_key(key)
        return KeyAction.NONE

    if key == QUIT_KEY:
        return KeyAction.QUIT
    if key == CHORD_PREFIX_KEY:
        state.chord_pending = True
    return KeyAction.NONE
