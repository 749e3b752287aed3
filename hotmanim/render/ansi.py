"""ANSI-aware width measurement and clipping for frame composition."""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width of one character.

    Combining marks take no columns; East Asian wide/fullwidth take two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, cols: int) -> str:
    """Clip or right-pad ``text`` to exactly ``cols`` columns, style reset."""
    clipped = clip_ansi_line(text, cols)
    pad = " " * max(0, cols - display_width(clipped))
    if "\033" in clipped:
        return f"{clipped}\033[0m{pad}"
    return f"{clipped}{pad}"


def truncate_middle_by(text: str, by: int) -> str:
    """Drop roughly ``by`` characters around the middle, marking the cut."""
    if by <= 0:
        return text
    cut_len = by // 2
    center = len(text) // 2
    left = min(max(0, center - (cut_len + 4)), center)
    right = max(center + cut_len + 4, center)
    return f"{text[:left]}[...]{text[right:]}"


def truncate_middle_to(text: str, width: int) -> str:
    return truncate_middle_by(text, max(0, len(text) - width))
