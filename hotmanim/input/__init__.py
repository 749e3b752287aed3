"""Input-layer public API for key decoding and mode handlers.

Low-level terminal decoding (`read_key`) is kept apart from the chord and
picker handlers the runtime loop dispatches to.
"""

from .chords import CHORD_KEYS, CHORD_PREFIX_KEY, QUIT_KEY, KeyAction, handle_chord_key
from .picker_keys import PickerKeyCallbacks, handle_picker_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "CHORD_KEYS",
    "CHORD_PREFIX_KEY",
    "QUIT_KEY",
    "KeyAction",
    "PickerKeyCallbacks",
    "handle_chord_key",
    "handle_picker_key",
]
