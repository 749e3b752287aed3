from __future__ import annotations

import unittest
from contextlib import contextmanager
from unittest import mock

from hotmanim.runtime import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from hotmanim.runtime.loop import poll_timeout_ms


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0
        self.clears = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1

    def clear(self) -> None:
        self.clears += 1


class _Recorder:
    def __init__(self, viewport_changes: list[bool] | None = None) -> None:
        self.draws = 0
        self.drains = 0
        self.keys: list[str] = []
        self._viewport_changes = list(viewport_changes or [])

    def draw(self) -> None:
        self.draws += 1

    def update_viewport(self) -> bool:
        return self._viewport_changes.pop(0) if self._viewport_changes else False

    def drain_change_event(self) -> None:
        self.drains += 1

    def handle_key(self, key: str) -> bool:
        self.keys.append(key)
        return key == "q"

    def callbacks(self) -> RuntimeLoopCallbacks:
        return RuntimeLoopCallbacks(
            draw=self.draw,
            update_viewport=self.update_viewport,
            drain_change_event=self.drain_change_event,
            handle_key=self.handle_key,
        )


class RuntimeLoopTests(unittest.TestCase):
    def _run(self, recorder: _Recorder, terminal: _FakeTerminal, keys) -> None:
        with mock.patch("hotmanim.runtime.loop.read_key", side_effect=keys):
            run_main_loop(terminal, 0, RuntimeLoopTiming(tick_seconds=0.01), recorder.callbacks())

    def test_loop_drains_each_iteration_and_stops_on_quit(self) -> None:
        recorder = _Recorder()
        terminal = _FakeTerminal()

        self._run(recorder, terminal, ["", "x", "q", "never"])

        self.assertEqual(recorder.keys, ["x", "q"])
        self.assertEqual(recorder.draws, 3)
        self.assertEqual(recorder.drains, 3)
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))

    def test_viewport_change_clears_terminal(self) -> None:
        recorder = _Recorder(viewport_changes=[True, False])
        terminal = _FakeTerminal()

        self._run(recorder, terminal, ["", "q"])

        self.assertEqual(terminal.clears, 1)

    def test_keyboard_interrupt_does_not_stop_loop(self) -> None:
        recorder = _Recorder()
        terminal = _FakeTerminal()

        self._run(recorder, terminal, [KeyboardInterrupt(), "q"])

        self.assertEqual(recorder.keys, ["q"])
        self.assertEqual(recorder.drains, 2)

    def test_callback_error_restores_terminal(self) -> None:
        recorder = _Recorder()
        terminal = _FakeTerminal()

        with mock.patch.object(recorder, "handle_key", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                self._run(recorder, terminal, ["x"])

        self.assertEqual(terminal.exited, 1)

    def test_poll_timeout_counts_down_to_next_tick(self) -> None:
        self.assertEqual(poll_timeout_ms(0.5, 10.0, 10.2), 300)
        self.assertEqual(poll_timeout_ms(0.5, 10.0, 11.0), 0)


if __name__ == "__main__":
    unittest.main()
