"""Filesystem change source backed by ``watchfiles``.

A background thread watches the working directory recursively and puts the
path of every modified ``.py`` file on a queue. The UI loop drains that
queue without blocking.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from watchfiles import Change, watch

from ..errors import WatchError

logger = logging.getLogger(__name__)

WATCH_DEBOUNCE_MS = 50
WATCH_STEP_MS = 50
STOP_JOIN_SECONDS = 1.0


def is_render_trigger(change: Change, path: str) -> bool:
    """Only content modifications of Python files trigger renders."""
    return change == Change.modified and path.endswith(".py")


class ChangeSource:
    """Owns the current directory watch and the queue of changed paths."""

    def __init__(
        self,
        watch_fn: Callable[..., Iterable[set[tuple[Change, str]]]] = watch,
    ) -> None:
        self._watch_fn = watch_fn
        self.events: queue.Queue[str] = queue.Queue()
        self.directory: Path | None = None
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    def start(self, directory: Path) -> None:
        """Begin watching ``directory``; raises ``WatchError`` if it is unusable."""
        if not directory.is_dir():
            raise WatchError(f"cannot watch {directory}: not a directory")
        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(directory, stop_event),
            name=f"watch-{directory.name or directory}",
            daemon=True,
        )
        thread.start()
        self.directory = directory
        self._stop_event = stop_event
        self._thread = thread
        logger.info("watching %s", directory)

    def stop(self) -> None:
        if self._stop_event is None:
            return
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(STOP_JOIN_SECONDS)
        logger.info("stopped watching %s", self.directory)
        self._stop_event = None
        self._thread = None
        self.directory = None

    def rewatch(self, directory: Path) -> None:
        """Unwatch the current directory, then watch ``directory``.

        Events for either directory may be missed in between.
        """
        self.stop()
        self.start(directory)

    def poll(self) -> str | None:
        """Return one pending changed path, or ``None`` without blocking."""
        try:
            return self.events.get_nowait()
        except queue.Empty:
            return None

    def _run(self, directory: Path, stop_event: threading.Event) -> None:
        try:
            for changes in self._watch_fn(
                directory,
                watch_filter=is_render_trigger,
                debounce=WATCH_DEBOUNCE_MS,
                step=WATCH_STEP_MS,
                stop_event=stop_event,
                raise_interrupt=False,
                recursive=True,
            ):
                for _change, path in sorted(changes, key=lambda item: item[1]):
                    self.events.put(path)
        except Exception:
            logger.exception("watch error for %s", directory)
