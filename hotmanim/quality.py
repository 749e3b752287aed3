"""Render quality levels and their renderer flag symbols."""

from __future__ import annotations

from enum import Enum


class Quality(Enum):
    """Ordered quality presets understood by ``manim --quality``."""

    LOW = ("l", "480p")
    MEDIUM = ("m", "720p")
    HIGH = ("h", "1080p")
    PLUS_HIGH = ("p", "1440p")
    ULTRA_HIGH = ("k", "4K")

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @classmethod
    def default(cls) -> Quality:
        return cls.LOW

    @classmethod
    def for_key(cls, key: str) -> Quality:
        """Map a quality-menu key to its level; unknown keys select ``LOW``."""
        for quality in cls:
            if quality.symbol == key:
                return quality
        return cls.default()
