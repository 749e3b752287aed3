"""Streaming scan of renderer output for the produced artifact path.

Each PTY chunk is scanned on its own. A marker/extension pair split across
two reads is missed; pseudo-terminal reads normally carry whole status lines.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ARTIFACT_MARKER = "media"
ARTIFACT_EXTENSIONS: tuple[str, ...] = (".mp4", ".mov", ".png")


def locate_artifact(chunk: bytes) -> str | None:
    """Return ``media...<ext>`` found in ``chunk``, or ``None``.

    Extensions are tried in priority order; the first one present anywhere
    after the marker wins even if a lower-priority one appears earlier.
    """
    text = chunk.decode("utf-8", errors="replace")
    start = text.find(ARTIFACT_MARKER)
    if start < 0:
        return None
    for extension in ARTIFACT_EXTENSIONS:
        end = text.find(extension, start)
        if end >= 0:
            return text[start : end + len(extension)]
    return None


@dataclass(frozen=True)
class Artifact:
    """Artifact path as printed by the renderer plus the directory it ran in."""

    path: str
    directory: Path

    def resolved(self) -> Path:
        candidate = Path(self.path)
        if candidate.is_absolute():
            return candidate
        return self.directory / candidate


class ArtifactSlot:
    """Lock-protected holder for the most recently located artifact."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._artifact: Artifact | None = None

    def store(self, artifact: Artifact) -> None:
        with self._lock:
            self._artifact = artifact

    def peek(self) -> Artifact | None:
        with self._lock:
            return self._artifact

    def discard(self, artifact: Artifact) -> bool:
        """Clear the slot if it still holds ``artifact``.

        A newer artifact stored by another session in the meantime is kept.
        """
        with self._lock:
            if self._artifact is not artifact:
                return False
            self._artifact = None
            return True


class ArtifactLocator:
    """Feeds one session's output chunks into a shared ``ArtifactSlot``."""

    def __init__(self, slot: ArtifactSlot, directory: Path) -> None:
        self.slot = slot
        self.directory = directory

    def feed(self, chunk: bytes) -> str | None:
        path = locate_artifact(chunk)
        if path is not None:
            logger.debug("located artifact %s", path)
            self.slot.store(Artifact(path=path, directory=self.directory))
        return path
