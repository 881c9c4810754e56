"""Size and count formatting for listing rows and the footer."""

from __future__ import annotations

import math

_BINARY_SUFFIXES = ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei")
_DECIMAL_SUFFIXES = ("", "k", "M", "G", "T", "P", "E")

HUMAN_SIZE_FIELD_WIDTH = 9
HUMAN_COUNT_FIELD_WIDTH = 8


def _scaled(value: float, base: int, suffixes: tuple[str, ...]) -> tuple[str, str]:
    idx = 0
    while value >= base and idx < len(suffixes) - 1:
        value /= base
        idx += 1
    if math.floor(value) == value:
        return f"{value:.0f}", suffixes[idx]
    return f"{value:.3f}", suffixes[idx]


def size_string(size: int, human_readable: bool) -> str:
    """Format bytes, e.g. ``1.500 KiB`` when human readable, else raw digits."""
    if not human_readable or size < 0:
        return str(size)
    number, suffix = _scaled(float(size), 1024, _BINARY_SUFFIXES)
    return f"{number} {suffix}B"


def count_string(count: int, human_readable: bool) -> str:
    """Format an object count with decimal suffixes, e.g. ``12.345k``."""
    if not human_readable or count < 0:
        return str(count)
    number, suffix = _scaled(float(count), 1000, _DECIMAL_SUFFIXES)
    return f"{number}{suffix}"


def size_field(size: int, human_readable: bool, raw_width: int) -> str:
    width = HUMAN_SIZE_FIELD_WIDTH if human_readable else raw_width
    return size_string(size, human_readable).rjust(width)


def count_field(count: int, human_readable: bool, raw_width: int) -> str:
    width = HUMAN_COUNT_FIELD_WIDTH if human_readable else raw_width
    return count_string(count, human_readable).rjust(width)
