"""Key legend rows shown at the bottom of every view."""

from __future__ import annotations

from dataclasses import dataclass

from ..quality import Quality
from ..runtime.state import AppState, Mode
from .ansi import display_width

LEGEND_KEY_STYLE = "\033[30;47m"
LEGEND_DESC_STYLE = "\033[90m"
RESET = "\033[0m"


@dataclass(frozen=True)
class LegendElement:
    name: str
    desc: str


IDLE_LEGEND = (
    LegendElement("q", "quit"),
    LegendElement("space", "begin chord"),
)

CHORD_LEGEND = (
    LegendElement("q", "set quality"),
    LegendElement("r", "render last file"),
    LegendElement("f", "change working directory"),
    LegendElement("m", "move last render to videos"),
)

QUALITY_LEGEND = tuple(LegendElement(quality.symbol, quality.label) for quality in Quality)

PICKER_LEGEND = (
    LegendElement("q", "quit"),
    LegendElement("hjkl / ←↓↑→", "navigate"),
    LegendElement("space", "confirm"),
    LegendElement("esc", "cancel"),
)

_MODE_LEGENDS = {
    Mode.IDLE: IDLE_LEGEND,
    Mode.AWAITING_CHORD: CHORD_LEGEND,
    Mode.QUALITY_MENU: QUALITY_LEGEND,
    Mode.FILE_PICKER: PICKER_LEGEND,
}


def legend_for_state(state: AppState) -> tuple[LegendElement, ...]:
    return _MODE_LEGENDS[state.mode]


def render_legend(elements: tuple[LegendElement, ...], width: int) -> str:
    """Render ``elements`` as one centered styled line."""
    parts: list[str] = []
    for entry in elements:
        parts.append(f"{LEGEND_KEY_STYLE} {entry.name} {RESET}")
        parts.append(f"{LEGEND_DESC_STYLE} {entry.desc} {RESET}")
    line = "".join(parts)
    indent = max(0, (width - display_width(line)) // 2)
    return " " * indent + line
