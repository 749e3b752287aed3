"""Exception taxonomy for recoverable, per-trigger failures.

Anything derived from ``HotManimError`` is surfaced in the status line and
logged while the main loop keeps running. Other exceptions are fatal.
"""

from __future__ import annotations


class HotManimError(Exception):
    """Base class for errors the interactive loop recovers from."""


class RenderError(HotManimError):
    """A render trigger could not start its renderer process."""


class PtyAllocationError(RenderError):
    """The pseudo-terminal pair for a render could not be opened."""


class SpawnError(RenderError):
    """The renderer process could not be spawned on its pseudo-terminal."""


class WatchError(HotManimError):
    """Registering a filesystem watch on a directory failed."""


class RelocateError(HotManimError):
    """Moving the last rendered artifact into the videos directory failed."""
