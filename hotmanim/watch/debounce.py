"""Duplicate-save suppression for change-triggered renders."""

from __future__ import annotations

DEBOUNCE_SECONDS = 0.5


class DebounceFilter:
    """Drops a trigger for the same file arriving within ``window`` seconds.

    Editors often emit several modify events per save. Suppressed events are
    dropped, never deferred.
    """

    def __init__(self, window: float = DEBOUNCE_SECONDS) -> None:
        self.window = window
        self.last_name = ""
        self.last_time = 0.0

    def accept(self, name: str, now: float) -> bool:
        if name == self.last_name and now - self.last_time < self.window:
            return False
        self.mark(name, now)
        return True

    def mark(self, name: str, now: float) -> None:
        """Record ``name`` as the latest trigger without filtering."""
        self.last_name = name
        self.last_time = now
