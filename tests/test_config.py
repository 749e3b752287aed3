from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from hotmanim.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def _load(self, payload: str) -> config.AppConfig:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(payload, encoding="utf-8")
            return config.load_config(path)

    def test_missing_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            loaded = config.load_config(Path(tmp) / "absent.json")

        self.assertEqual(loaded, config.AppConfig())
        self.assertEqual(loaded.renderer, "manim")
        self.assertEqual(loaded.preview_command, "mpv")
        self.assertEqual(loaded.tick_seconds, 0.01)
        self.assertEqual(loaded.debounce_seconds, 0.5)

    def test_valid_values_override_defaults(self) -> None:
        loaded = self._load(
            json.dumps({"renderer": "/opt/manim", "preview_command": "vlc", "tick_ms": 20, "debounce_ms": 0})
        )

        self.assertEqual(loaded.renderer, "/opt/manim")
        self.assertEqual(loaded.preview_command, "vlc")
        self.assertEqual(loaded.tick_ms, 20)
        self.assertEqual(loaded.debounce_ms, 0)

    def test_invalid_values_fall_back(self) -> None:
        loaded = self._load(json.dumps({"renderer": "  ", "preview_command": 3, "tick_ms": True, "debounce_ms": -5}))

        self.assertEqual(loaded, config.AppConfig())

    def test_malformed_or_non_object_json_falls_back(self) -> None:
        self.assertEqual(self._load("{not json"), config.AppConfig())
        self.assertEqual(self._load("[1, 2]"), config.AppConfig())


if __name__ == "__main__":
    unittest.main()
