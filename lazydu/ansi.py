"""Display-width aware text shaping for fixed-width terminal rows.

Rows are built as plain text and styled afterwards, so these helpers only
need to measure, pad, clip, and slice by terminal columns.
"""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def fit_text(text: str, width: int, fill: str = " ") -> str:
    """Clip or pad ``text`` with ``fill`` to exactly ``width`` columns."""
    clipped = clip_text(text, width)
    return clipped + fill * max(0, width - display_width(clipped))


def slice_columns(text: str, start: int, end: int) -> str:
    """Return the part of ``text`` covering display columns ``[start, end)``.

    A wide character straddling either edge is replaced by spaces so the
    result is exactly ``end - start`` columns when ``text`` is long enough.
    """
    if end <= start:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col >= end:
            break
        if col >= start and col + w <= end:
            out.append(ch)
        elif col + w > start:
            out.append(" " * (min(col + w, end) - max(col, start)))
        col += w
    return "".join(out)
