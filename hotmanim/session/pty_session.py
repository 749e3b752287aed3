"""Renderer process lifecycle on a pseudo-terminal.

``start_render`` opens a PTY pair, spawns the renderer on the subordinate
side and hands the controller side to a detached pump thread. The pump
copies output into the shared ``TerminalBuffer``, scans it for artifacts,
and reports the exit status. The caller never joins it.
"""

from __future__ import annotations

import errno
import fcntl
import logging
import os
import pty
import struct
import subprocess
import termios
import threading
from dataclasses import dataclass
from pathlib import Path

from ..errors import PtyAllocationError, SpawnError
from ..quality import Quality
from ..terminal_buffer import TerminalBuffer
from .artifact import ArtifactLocator, ArtifactSlot
from .command import (
    DEFAULT_PREVIEW_COMMAND,
    DEFAULT_RENDERER,
    RenderCommand,
    Size,
    build_render_command,
    pty_size_for_viewport,
)

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 8192
REAP_TIMEOUT_SECONDS = 5.0


@dataclass
class SessionHandle:
    """Reference to a running render; only tests need to wait on it."""

    pid: int
    command: RenderCommand
    thread: threading.Thread

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the pump to finish; return whether it did."""
        self.thread.join(timeout)
        return not self.thread.is_alive()


def open_pty(size: Size) -> tuple[int, int]:
    """Open a controller/subordinate PTY pair with the given window size."""
    try:
        master_fd, slave_fd = pty.openpty()
    except OSError as exc:
        raise PtyAllocationError(f"could not open pseudo-terminal: {exc}") from exc
    try:
        winsize = struct.pack("HHHH", size.rows, size.cols, 0, 0)
        fcntl.ioctl(slave_fd, termios.TIOCSWINSZ, winsize)
    except OSError as exc:
        os.close(master_fd)
        os.close(slave_fd)
        raise PtyAllocationError(f"could not size pseudo-terminal: {exc}") from exc
    return master_fd, slave_fd


def exit_banner(program: str, code: int) -> bytes:
    name = Path(program).name or program
    return f"\r\n{name} exited with code: {code}\r\n".encode("utf-8")


def _reap(proc: subprocess.Popen) -> None:
    """Kill the child if it outlived its pump, then wait for it briefly."""
    if proc.poll() is not None:
        return
    proc.kill()
    try:
        proc.wait(REAP_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        logger.warning("renderer pid %s did not exit after kill", proc.pid)


def _pump_output(
    proc: subprocess.Popen,
    master_fd: int,
    program: str,
    buffer: TerminalBuffer,
    locator: ArtifactLocator,
) -> None:
    screen_ok = True
    try:
        while True:
            try:
                chunk = os.read(master_fd, READ_CHUNK_SIZE)
            except OSError as exc:
                # Linux reports a hung-up PTY as EIO instead of a zero read.
                if exc.errno == errno.EIO:
                    break
                raise
            if not chunk:
                break
            locator.feed(chunk)
            if not screen_ok:
                continue
            try:
                buffer.process(chunk)
            except Exception:
                logger.exception("render output pump for pid %s stopped updating the screen", proc.pid)
                screen_ok = False

        code = proc.wait()
        logger.info("%s (pid %s) exited with code %s", program, proc.pid, code)
        if screen_ok:
            buffer.process(exit_banner(program, code))
    except Exception:
        logger.exception("render output pump for pid %s failed", proc.pid)
    finally:
        os.close(master_fd)
        _reap(proc)


def start_render(
    command: RenderCommand,
    buffer: TerminalBuffer,
    slot: ArtifactSlot,
) -> SessionHandle:
    """Spawn ``command`` on a fresh PTY and detach its output pump.

    Raises ``PtyAllocationError`` or ``SpawnError``; both leave no process
    and no open descriptors behind.
    """
    master_fd, slave_fd = open_pty(command.size)
    env = dict(os.environ)
    env.setdefault("TERM", "xterm-256color")
    env["LINES"] = str(command.size.rows)
    env["COLUMNS"] = str(command.size.cols)
    try:
        proc = subprocess.Popen(
            command.argv,
            cwd=str(command.cwd),
            stdin=slave_fd,
            stdout=slave_fd,
            stderr=slave_fd,
            env=env,
            start_new_session=True,
            close_fds=True,
        )
    except (OSError, ValueError) as exc:
        os.close(master_fd)
        os.close(slave_fd)
        raise SpawnError(f"could not start {command.program}: {exc}") from exc

    # The controller side only reports EOF once every subordinate handle,
    # including ours, is closed.
    os.close(slave_fd)

    logger.info(
        "started %s (pid %s) in %s at %sx%s",
        " ".join(command.argv),
        proc.pid,
        command.cwd,
        command.size.rows,
        command.size.cols,
    )
    locator = ArtifactLocator(slot, command.cwd)
    thread = threading.Thread(
        target=_pump_output,
        args=(proc, master_fd, command.program, buffer, locator),
        name=f"render-pump-{proc.pid}",
        daemon=True,
    )
    thread.start()
    return SessionHandle(pid=proc.pid, command=command, thread=thread)


class Renderer:
    """Starts render sessions that share one buffer and artifact slot."""

    def __init__(
        self,
        buffer: TerminalBuffer,
        slot: ArtifactSlot,
        *,
        program: str = DEFAULT_RENDERER,
        preview_command: str = DEFAULT_PREVIEW_COMMAND,
    ) -> None:
        self.buffer = buffer
        self.slot = slot
        self.program = program
        self.preview_command = preview_command

    def render(self, source: str, quality: Quality, directory: Path, viewport: Size) -> SessionHandle:
        command = build_render_command(
            source,
            quality,
            directory,
            pty_size_for_viewport(viewport),
            program=self.program,
            preview_command=self.preview_command,
        )
        return start_render(command, self.buffer, self.slot)
