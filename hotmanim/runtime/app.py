"""Application wiring: state, render sessions, watch, and key actions.

``Application`` owns the foreground side of the program. Render pumps only
reach back into it through the shared ``TerminalBuffer`` and
``ArtifactSlot``.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from pathlib import Path

from ..errors import HotManimError, RenderError, WatchError
from ..input import KeyAction, PickerKeyCallbacks, handle_chord_key, handle_picker_key
from ..relocate import relocate_last_artifact
from ..render import FrameWriter, build_frame
from ..session import ArtifactSlot, Renderer, SessionHandle, Size, pty_size_for_viewport
from ..terminal_buffer import TerminalBuffer
from ..watch import ChangeSource, DebounceFilter
from .config import AppConfig
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0


class Application:
    """Owns app state and turns change events and key actions into renders.

    Per-trigger failures are logged and shown in the status line; the loop
    keeps running.
    """

    def __init__(
        self,
        state: AppState,
        buffer: TerminalBuffer,
        slot: ArtifactSlot,
        renderer: Renderer,
        changes: ChangeSource,
        *,
        viewport_size: Callable[[], Size],
        writer: FrameWriter | None = None,
        clock: Callable[[], float] = time.monotonic,
        relocate: Callable[[ArtifactSlot], Path | None] = relocate_last_artifact,
    ) -> None:
        self.state = state
        self.buffer = buffer
        self.slot = slot
        self.renderer = renderer
        self.changes = changes
        self.viewport_size = viewport_size
        self.writer = writer
        self.clock = clock
        self.relocate = relocate
        self._picker_callbacks = PickerKeyCallbacks(commit_directory=self.commit_directory)

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.state.status_message = message
        self.state.status_is_error = error
        self.state.status_message_until = self.clock() + STATUS_MESSAGE_SECONDS

    def surface_error(self, exc: HotManimError) -> None:
        logger.error("%s", exc)
        self.set_status(str(exc), error=True)

    def trigger_render(self, name: str) -> SessionHandle | None:
        state = self.state
        try:
            return self.renderer.render(name, state.quality, state.directory, state.size)
        except RenderError as exc:
            self.surface_error(exc)
            return None

    def drain_change_event(self) -> SessionHandle | None:
        """Start a render for at most one pending change, unless debounced."""
        name = self.changes.poll()
        if name is None:
            return None
        if not self.state.debounce.accept(name, self.clock()):
            logger.debug("debounced change to %s", name)
            return None
        return self.trigger_render(name)

    def re_render(self) -> SessionHandle | None:
        name = self.state.last_file
        if not name:
            return None
        return self.trigger_render(name)

    def relocate_artifact(self) -> Path | None:
        try:
            moved = self.relocate(self.slot)
        except HotManimError as exc:
            self.surface_error(exc)
            return None
        if moved is not None:
            self.set_status(f"moved last render to {moved}")
        return moved

    def commit_directory(self, directory: Path) -> None:
        """Make ``directory`` the watched working directory.

        If the new watch cannot be registered the previous directory stays
        current and is watched again.
        """
        previous = self.state.directory
        try:
            self.changes.rewatch(directory)
        except WatchError as exc:
            self.surface_error(exc)
            try:
                self.changes.start(previous)
            except WatchError as restore_exc:
                self.surface_error(restore_exc)
            return
        self.state.directory = directory
        logger.info("working directory is now %s", directory)

    def handle_key(self, key: str) -> bool:
        """Route one key press; return ``True`` when the app should quit."""
        state = self.state
        if state.picker is not None:
            _handled, should_quit = handle_picker_key(key, state, self._picker_callbacks)
            return should_quit

        action = handle_chord_key(key, state)
        if action is KeyAction.QUIT:
            return True
        if action is KeyAction.RE_RENDER:
            self.re_render()
        elif action is KeyAction.RELOCATE:
            self.relocate_artifact()
        return False

    def update_viewport(self) -> bool:
        """Record the terminal size; resize the buffer when it changed."""
        size = self.viewport_size()
        if size == self.state.size:
            return False
        self.state.size = size
        pty_size = pty_size_for_viewport(size)
        self.buffer.resize(pty_size.rows, pty_size.cols)
        if self.writer is not None:
            self.writer.invalidate()
        return True

    def draw(self) -> None:
        if self.writer is None:
            return
        lines = build_frame(self.state, self.buffer.snapshot(), self.state.size, self.clock())
        self.writer.draw(lines)

    def loop_callbacks(self) -> RuntimeLoopCallbacks:
        return RuntimeLoopCallbacks(
            draw=self.draw,
            update_viewport=self.update_viewport,
            drain_change_event=self.drain_change_event,
            handle_key=self.handle_key,
        )


def run_app(
    directory: Path,
    config: AppConfig,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Set up the terminal, watch ``directory``, and run until quit.

    Terminal setup failures and an unwatchable start directory are fatal.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(stdin_fd, stdout_fd)
    size = terminal.size()
    pty_size = pty_size_for_viewport(size)

    buffer = TerminalBuffer(pty_size.rows, pty_size.cols)
    slot = ArtifactSlot()
    renderer = Renderer(buffer, slot, program=config.renderer, preview_command=config.preview_command)
    state = AppState(
        directory=directory,
        size=size,
        debounce=DebounceFilter(config.debounce_seconds),
    )
    changes = ChangeSource()
    changes.start(directory)
    app = Application(
        state,
        buffer,
        slot,
        renderer,
        changes,
        viewport_size=terminal.size,
        writer=FrameWriter(stdout_fd),
    )
    logger.info("hotmanim started in %s", directory)
    try:
        run_main_loop(
            terminal,
            stdin_fd,
            RuntimeLoopTiming(tick_seconds=config.tick_seconds),
            app.loop_callbacks(),
        )
    finally:
        # Render children are left running; their pump threads are daemons.
        changes.stop()
        logger.info("hotmanim stopped")
