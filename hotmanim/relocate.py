"""Move the last rendered artifact into the user's videos directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from platformdirs import user_videos_dir

from .errors import RelocateError
from .session.artifact import ArtifactSlot

logger = logging.getLogger(__name__)


def videos_directory() -> Path:
    try:
        return Path(user_videos_dir())
    except (KeyError, RuntimeError) as exc:
        raise RelocateError(f"cannot resolve videos directory: {exc}") from exc


def free_target(directory: Path, name: str) -> Path:
    """Return ``directory/name``, or ``stem-N.suffix`` when that is taken."""
    target = directory / name
    stem, suffix = target.stem, target.suffix
    counter = 1
    while target.exists():
        target = directory / f"{stem}-{counter}{suffix}"
        counter += 1
    return target


def relocate_last_artifact(slot: ArtifactSlot, destination: Path | None = None) -> Path | None:
    """Move the recorded artifact, clearing the slot once the move succeeded.

    Returns the new path, or ``None`` when nothing was recorded. Existing
    videos are never overwritten. Raises ``RelocateError`` if the destination
    is unknown or the move fails; the artifact then stays recorded.
    """
    artifact = slot.peek()
    if artifact is None:
        return None
    source = artifact.resolved()
    target_dir = destination if destination is not None else videos_directory()
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        moved = Path(shutil.move(str(source), str(free_target(target_dir, source.name))))
    except OSError as exc:
        raise RelocateError(f"could not move {source} to {target_dir}: {exc}") from exc
    slot.discard(artifact)
    logger.info("moved %s to %s", source, moved)
    return moved
