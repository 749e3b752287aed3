"""Renderer command construction and pseudo-terminal sizing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..quality import Quality

DEFAULT_RENDERER = "manim"
DEFAULT_PREVIEW_COMMAND = "mpv"

# status line, legend line, top/bottom margin and the box borders
CHROME_ROWS = 6
# left/right margin and the box borders
CHROME_COLS = 4


@dataclass(frozen=True)
class Size:
    rows: int
    cols: int


def pty_size_for_viewport(viewport: Size) -> Size:
    """Return the output-box size left after subtracting fixed UI chrome."""
    return Size(
        rows=max(1, viewport.rows - CHROME_ROWS),
        cols=max(1, viewport.cols - CHROME_COLS),
    )


@dataclass(frozen=True)
class RenderCommand:
    """Everything needed to spawn one renderer process."""

    program: str
    args: tuple[str, ...]
    cwd: Path
    size: Size

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


def build_render_command(
    source: str,
    quality: Quality,
    directory: Path,
    size: Size,
    *,
    program: str = DEFAULT_RENDERER,
    preview_command: str = DEFAULT_PREVIEW_COMMAND,
) -> RenderCommand:
    args = (
        "render",
        "--preview",
        "--preview_command",
        preview_command,
        "--quality",
        quality.symbol,
        source,
    )
    return RenderCommand(program=program, args=args, cwd=directory, size=size)
