"""Change detection: filesystem watch source and duplicate-save debounce."""

from .debounce import DEBOUNCE_SECONDS, DebounceFilter
from .source import ChangeSource, is_render_trigger

__all__ = ["DEBOUNCE_SECONDS", "ChangeSource", "DebounceFilter", "is_render_trigger"]
