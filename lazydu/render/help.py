"""Key binding help shown in the ``?`` popup."""

from __future__ import annotations

HELP_TITLE = "lazydu"

HELP_NAVIGATION_LINES: tuple[str, ...] = (
    " ↑,↓ or k,j to Move",
    " PgUp,PgDn or =,- to move a page",
    " →,l or Enter to enter",
    " ←,h to return",
    " c toggle counts",
    " g toggle graph",
    " a toggle average size in directory",
    " u toggle human-readable format",
    " n,s,C,A sort by name,size,count,average size",
    " d delete file/directory",
    " v select file/directory",
    " V enter visual select mode",
    " D delete selected files/directories",
)

HELP_CLIPBOARD_LINE = " y copy current path to clipboard"

HELP_TRAILER_LINES: tuple[str, ...] = (
    " Y display current path",
    " ^L refresh screen (fix screen corruption)",
    " ? to toggle help on and off",
    " q/ESC/^c to quit",
)


def help_text(clipboard_available: bool) -> list[str]:
    """Return help popup lines; the copy binding is listed only when usable."""
    lines = [HELP_TITLE, *HELP_NAVIGATION_LINES]
    if clipboard_available:
        lines.append(HELP_CLIPBOARD_LINE)
    lines.extend(HELP_TRAILER_LINES)
    return lines
