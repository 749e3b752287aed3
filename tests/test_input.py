"""Tests for raw stdin key decoding."""

from __future__ import annotations

import os
import unittest

from hotmanim.input import _PENDING_BYTES, read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        _PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        _PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _keys(self, data: bytes, count: int) -> list[str]:
        os.write(self.write_fd, data)
        return [read_key(self.read_fd, timeout_ms=50) for _ in range(count)]

    def test_plain_characters_and_space(self) -> None:
        self.assertEqual(self._keys(b"q f", 3), ["q", " ", "f"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

    def test_arrow_keys_and_ss3_variants(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[A\x1b[B\x1bOC\x1bOD", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_bare_escape(self) -> None:
        self.assertEqual(self._keys(b"\x1b", 1), ["ESC"])

    def test_escape_followed_by_key_keeps_key(self) -> None:
        self.assertEqual(self._keys(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys(self) -> None:
        self.assertEqual(self._keys(b"\r\x7f\x03", 3), ["ENTER", "BACKSPACE", "CTRL_C"])

    def test_unknown_csi_sequence_is_swallowed(self) -> None:
        self.assertEqual(self._keys(b"\x1b[3~j", 2), ["UNKNOWN", "j"])

    def test_multibyte_character(self) -> None:
        self.assertEqual(self._keys("é".encode("utf-8"), 1), ["é"])


if __name__ == "__main__":
    unittest.main()
