"""Shared terminal-emulation buffer for renderer output.

Wraps a ``pyte`` screen and byte stream behind a read/write lock so render
pump threads can feed raw PTY bytes while the UI thread takes snapshots.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import pyte

_BASE_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "brown": 3,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}


class ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def _color_sgr(color: str, background: bool) -> str:
    """Translate a pyte color name or hex triple into SGR parameters."""
    if color == "default":
        return ""
    name = color
    bright = False
    if name.startswith("bright") and name[6:] in _BASE_COLORS:
        name = name[6:]
        bright = True
    if name in _BASE_COLORS:
        base = (100 if bright else 40) if background else (90 if bright else 30)
        return str(base + _BASE_COLORS[name])
    if len(color) == 6:
        try:
            r, g, b = (int(color[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            return ""
        return f"{48 if background else 38};2;{r};{g};{b}"
    return ""


def _char_sgr(char) -> str:
    params: list[str] = []
    if char.bold:
        params.append("1")
    if char.italics:
        params.append("3")
    if char.underscore:
        params.append("4")
    if char.reverse:
        params.append("7")
    fg = _color_sgr(char.fg, background=False)
    if fg:
        params.append(fg)
    bg = _color_sgr(char.bg, background=True)
    if bg:
        params.append(bg)
    return ";".join(params)


@dataclass(frozen=True)
class ScreenSnapshot:
    """Immutable copy of the emulated screen taken under the read lock."""

    rows: int
    cols: int
    lines: tuple[str, ...]
    styled_lines: tuple[str, ...]


class TerminalBuffer:
    """pyte-backed emulated terminal shared by every render session."""

    def __init__(self, rows: int, cols: int) -> None:
        self._lock = ReadWriteLock()
        self._screen = pyte.Screen(max(1, cols), max(1, rows))
        self._stream = pyte.ByteStream(self._screen)

    @property
    def rows(self) -> int:
        return self._screen.lines

    @property
    def cols(self) -> int:
        return self._screen.columns

    def process(self, data: bytes) -> None:
        """Feed raw renderer bytes, holding the write lock."""
        with self._lock.write():
            self._stream.feed(data)

    def resize(self, rows: int, cols: int) -> None:
        rows = max(1, rows)
        cols = max(1, cols)
        with self._lock.write():
            if (rows, cols) != (self._screen.lines, self._screen.columns):
                self._screen.resize(rows, cols)

    def snapshot(self) -> ScreenSnapshot:
        with self._lock.read():
            screen = self._screen
            lines = tuple(screen.display)
            styled = tuple(self._styled_row(y) for y in range(screen.lines))
            return ScreenSnapshot(
                rows=screen.lines,
                cols=screen.columns,
                lines=lines,
                styled_lines=styled,
            )

    def _styled_row(self, y: int) -> str:
        """Render one screen row as ANSI text, grouping cells by style."""
        row = self._screen.buffer[y]
        out: list[str] = []
        current = ""
        for x in range(self._screen.columns):
            char = row[x]
            if not char.data:
                # trailing half of a wide character
                continue
            sgr = _char_sgr(char)
            if sgr != current:
                out.append(f"\033[0;{sgr}m" if sgr else "\033[0m")
                current = sgr
            out.append(char.data)
        if current:
            out.append("\033[0m")
        return "".join(out).rstrip(" ")
