"""Main interactive event loop for the terminal UI.

Single-threaded and poll-driven: draw, track the viewport, drain one change
event, then wait for one key until the next tick. Feature logic lives in
callbacks so the loop itself stays wiring only.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    tick_seconds: float


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    draw: Callable[[], None]
    update_viewport: Callable[[], bool]
    drain_change_event: Callable[[], object]
    handle_key: Callable[[str], bool]


def poll_timeout_ms(tick_seconds: float, last_tick: float, now: float) -> int:
    """Milliseconds left until the next tick, never negative."""
    remaining = tick_seconds - (now - last_tick)
    return max(0, int(remaining * 1000))


def run_main_loop(
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run the loop until a key handler asks to quit.

    Exceptions escaping a callback end the loop; ``raw_mode`` restores the
    terminal on the way out either way.
    """
    ops = callbacks
    last_tick = clock()
    with terminal.raw_mode():
        while True:
            ops.draw()
            if ops.update_viewport():
                terminal.clear()
            timeout_ms = poll_timeout_ms(timing.tick_seconds, last_tick, clock())
            ops.drain_change_event()

            try:
                key = read_key(stdin_fd, timeout_ms=timeout_ms)
            except KeyboardInterrupt:
                continue
            if key and ops.handle_key(key):
                break

            now = clock()
            if now - last_tick >= timing.tick_seconds:
                last_tick = now
