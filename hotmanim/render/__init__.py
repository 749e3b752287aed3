"""Frame composition for the output view and the directory picker.

Builds complete ANSI frames from app state and a buffer snapshot. Writing is
skipped when the composed frame has not changed since the last draw.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..picker_panel import DirectoryPicker
from ..runtime.state import AppState
from ..session.command import Size
from ..terminal_buffer import ScreenSnapshot
from .ansi import clip_ansi_line, display_width, fit_ansi_line, truncate_middle_by, truncate_middle_to
from .legend import legend_for_state, render_legend

OUTPUT_TITLE = " manim output "
PICKER_HEADER = "choose a directory to monitor for file changes"

DIR_STYLE = "\033[3;34m"
QUALITY_STYLE = "\033[3;36m"
ERROR_STYLE = "\033[1;31m"
ITALIC = "\033[3m"
REVERSE = "\033[7m"
RESET = "\033[0m"


def _margin(line: str, cols: int) -> str:
    """Place ``line`` inside the one-column frame margin."""
    return " " + fit_ansi_line(line, max(0, cols - 2))


def build_status_line(directory: Path, quality_label: str, width: int) -> str:
    """Return the top status line, middle-truncating the directory to fit."""
    dir_text = str(directory)
    plain_len = len(f"Rendering files in {dir_text} at {quality_label} quality")
    dir_text = truncate_middle_by(dir_text, max(0, plain_len - width))
    return (
        f"Rendering files in {DIR_STYLE}{dir_text}{RESET}"
        f" at {QUALITY_STYLE}{quality_label}{RESET} quality"
    )


def box_lines(title: str, body: list[str], inner_rows: int, inner_cols: int) -> list[str]:
    """Draw ``body`` inside a single-line border with ``title`` on top."""
    title = clip_ansi_line(title, max(0, inner_cols))
    top = "┌" + title + "─" * max(0, inner_cols - display_width(title)) + "┐"
    lines = [top]
    for row in range(inner_rows):
        text = body[row] if row < len(body) else ""
        lines.append("│" + fit_ansi_line(text, inner_cols) + "│")
    lines.append("└" + "─" * inner_cols + "┘")
    return lines


def _picker_body(picker: DirectoryPicker, inner_rows: int) -> list[str]:
    if picker.error:
        return [f"{ERROR_STYLE}{picker.error}{RESET}"]
    start = 0
    if picker.selected >= inner_rows:
        start = picker.selected - inner_rows + 1
    body: list[str] = []
    for idx, entry in enumerate(picker.entries[start : start + inner_rows], start=start):
        label = entry.name
        if entry.is_dir:
            label = f"\033[1;34m{label}{RESET}"
        if idx == picker.selected:
            label = REVERSE + label.replace(RESET, f"{RESET}{REVERSE}") + RESET
        body.append(label)
    return body


def build_frame(state: AppState, snapshot: ScreenSnapshot, viewport: Size, now: float) -> list[str]:
    """Compose every row of the frame for the current mode."""
    rows = max(1, viewport.rows)
    cols = max(1, viewport.cols)
    inner_rows = max(1, rows - 6)
    inner_cols = max(1, cols - 4)

    picker = state.picker
    if state.status_message and now < state.status_message_until:
        style = ERROR_STYLE if state.status_is_error else QUALITY_STYLE
        header = f"{style}{state.status_message}{RESET}"
    elif picker is not None:
        header = f"{ITALIC}{PICKER_HEADER}{RESET}"
    else:
        header = build_status_line(state.directory, state.quality.label, cols - 2)

    if picker is not None:
        title = truncate_middle_to(str(picker.cwd), inner_cols)
        body = _picker_body(picker, inner_rows)
    else:
        title = OUTPUT_TITLE
        body = list(snapshot.styled_lines)

    lines = [""]
    lines.append(_margin(header, cols))
    lines.extend(" " + line for line in box_lines(title, body, inner_rows, inner_cols))
    lines.append(_margin(render_legend(legend_for_state(state), cols - 2), cols))
    lines.append("")
    return lines[:rows]


class FrameWriter:
    """Writes composed frames to the terminal, skipping unchanged ones."""

    def __init__(self, stdout_fd: int) -> None:
        self.stdout_fd = stdout_fd
        self._last_frame: str | None = None

    def draw(self, lines: list[str]) -> bool:
        frame = "\033[H" + "\r\n".join(f"{line}\033[0m\033[K" for line in lines)
        if frame == self._last_frame:
            return False
        os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))
        self._last_frame = frame
        return True

    def invalidate(self) -> None:
        self._last_frame = None
