"""Directory browser model backing the working-directory picker."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class PickerEntry:
    """One visible row in the directory browser."""

    name: str
    path: Path
    is_dir: bool


def list_picker_entries(directory: Path, show_hidden: bool) -> tuple[list[PickerEntry], Exception | None]:
    """List ``directory`` with a leading ``../`` row, directories first.

    Returns ``(entries, scan_error)``; unreadable directories yield only the
    parent row plus the error.
    """
    entries: list[PickerEntry] = []
    if directory.parent != directory:
        entries.append(PickerEntry(name="../", path=directory.parent, is_dir=True))

    children: list[PickerEntry] = []
    try:
        with os.scandir(directory) as scanned:
            for child in scanned:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                label = f"{name}/" if is_dir else name
                children.append(PickerEntry(name=label, path=Path(child.path), is_dir=is_dir))
    except OSError as exc:
        return entries, exc

    children.sort(key=lambda entry: (not entry.is_dir, entry.name.casefold(), entry.name))
    entries.extend(children)
    return entries, None


@dataclass
class DirectoryPicker:
    cwd: Path
    show_hidden: bool = False
    selected: int = 0
    entries: list[PickerEntry] = field(default_factory=list)
    error: str = ""

    def __post_init__(self) -> None:
        self.cwd = self.cwd.resolve()
        self.refresh()

    def refresh(self) -> None:
        self.entries, scan_error = list_picker_entries(self.cwd, self.show_hidden)
        self.error = "" if scan_error is None else str(scan_error)
        self.selected = max(0, min(self.selected, len(self.entries) - 1))

    @property
    def current(self) -> PickerEntry | None:
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None

    def move(self, delta: int) -> None:
        if not self.entries:
            return
        self.selected = max(0, min(len(self.entries) - 1, self.selected + delta))

    def jump(self, index: int) -> None:
        if self.entries:
            self.selected = index % len(self.entries)

    def enter(self) -> bool:
        """Descend into the selected directory; files are ignored."""
        entry = self.current
        if entry is None or not entry.is_dir:
            return False
        previous = self.cwd
        self.cwd = entry.path.resolve()
        self.selected = 0
        self.refresh()
        if entry.name == "../":
            self._select_path(previous)
        return True

    def leave(self) -> bool:
        """Go to the parent directory, keeping the old directory selected."""
        if self.cwd.parent == self.cwd:
            return False
        previous = self.cwd
        self.cwd = self.cwd.parent
        self.selected = 0
        self.refresh()
        self._select_path(previous)
        return True

    def toggle_hidden(self) -> None:
        self.show_hidden = not self.show_hidden
        self.refresh()

    def _select_path(self, path: Path) -> None:
        for idx, entry in enumerate(self.entries):
            if entry.path == path:
                self.selected = idx
                return
