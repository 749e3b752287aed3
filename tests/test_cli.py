"""CLI argument and directory resolution tests.

Verifies how ``hotmanim.cli.main`` picks the watched directory and wires
config and logging before handing over to the runtime.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hotmanim import cli
from hotmanim.errors import WatchError
from hotmanim.runtime.config import AppConfig


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        patcher = mock.patch("hotmanim.cli.configure_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_main_defaults_to_current_working_directory(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root)
            with mock.patch("hotmanim.cli.run_app") as run_app:
                cli.main([])
        finally:
            os.chdir(previous_cwd)

        run_app.assert_called_once()
        directory, config = run_app.call_args.args
        self.assertEqual(directory, self.root)
        self.assertIsInstance(config, AppConfig)

    def test_explicit_directory_wins_over_default(self) -> None:
        target = self.root / "scenes"
        target.mkdir()

        with mock.patch("hotmanim.cli.run_app") as run_app:
            cli.main([str(target)], default_path=self.root)

        self.assertEqual(run_app.call_args.args[0], target)

    def test_missing_or_file_path_exits(self) -> None:
        scene = self.root / "scene.py"
        scene.write_text("", encoding="utf-8")

        with mock.patch("hotmanim.cli.run_app") as run_app:
            with self.assertRaisesRegex(SystemExit, "Path not found"):
                cli.main([str(self.root / "missing")])
            with self.assertRaisesRegex(SystemExit, "Not a directory"):
                cli.main([str(scene)])

        run_app.assert_not_called()
        self.configure_logging.assert_not_called()

    def test_config_and_logging_options_are_applied(self) -> None:
        config_path = self.root / "config.json"
        config_path.write_text('{"renderer": "/opt/bin/manim"}', encoding="utf-8")
        log_path = self.root / "hm.log"

        with mock.patch("hotmanim.cli.run_app") as run_app:
            cli.main(
                [str(self.root), "--config", str(config_path), "--log-file", str(log_path), "--log-level", "debug"]
            )

        self.configure_logging.assert_called_once_with(log_path, "DEBUG")
        self.assertEqual(run_app.call_args.args[1].renderer, "/opt/bin/manim")

    def test_watch_failure_becomes_exit_message(self) -> None:
        with mock.patch("hotmanim.cli.run_app", side_effect=WatchError("cannot watch /nowhere")):
            with self.assertRaisesRegex(SystemExit, "cannot watch /nowhere"):
                cli.main([str(self.root)])


if __name__ == "__main__":
    unittest.main()
