"""Full-screen ANSI renderer for a controller ``Frame``.

Layout: header bar, directory line, listing rows, footer bar, and an
optional centered popup box drawn over the listing.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ..ansi import display_width, fit_text, slice_columns
from ..ui_theme import DEFAULT_THEME, UITheme

if TYPE_CHECKING:
    from ..controller.frame import Frame, Row

CHROME_ROWS = 3
MIN_POPUP_WIDTH = 10

Piece = tuple[str, str]


def listing_rows_for_height(height: int) -> int:
    """Number of listing rows that fit between the header bars and the footer."""
    return max(1, height - CHROME_ROWS)


def _row_style(row: Row, theme: UITheme) -> str:
    if row.is_selected:
        return theme.row_selected_cursor if row.is_cursor else theme.row_selected
    if row.has_error:
        return theme.row_error_cursor if row.is_cursor else theme.row_error
    if row.entries_have_errors:
        return theme.row_warning_cursor if row.is_cursor else theme.row_warning
    return theme.row_cursor if row.is_cursor else theme.row


def _join_pieces(pieces: list[Piece], width: int, theme: UITheme) -> str:
    out: list[str] = []
    remaining = width
    for text, style in pieces:
        if remaining <= 0:
            break
        clipped = fit_text(text, min(remaining, display_width(text)))
        out.append(style + clipped)
        remaining -= display_width(clipped)
    out.append(theme.reset)
    return "".join(out)


def option_line_length(options: list[str]) -> int:
    """Columns taken by ``" <option> "`` cells for every menu option."""
    return sum(len(option) for option in options) + 4 * len(options)


def _menu_pieces(options: list[str], chosen: int, width: int, theme: UITheme) -> list[Piece]:
    pad = max(0, (width - option_line_length(options)) // 2)
    pieces: list[Piece] = [(" " * pad, theme.popup_text)]
    used = pad
    for idx, option in enumerate(options):
        style = theme.popup_option_selected if idx == chosen else theme.popup_option
        pieces.append((" ", theme.popup_text))
        pieces.append((f"<{option}>", style))
        pieces.append((" ", theme.popup_text))
        used += len(option) + 4
    pieces.append((" " * max(0, width - used), theme.popup_text))
    return pieces


def popup_box(
    lines: list[str],
    menu: list[str],
    chosen: int,
    width: int,
    height: int,
    theme: UITheme,
) -> tuple[int, int, list[list[Piece]]]:
    """Lay out the popup; return ``(left_col, top_row, rows_of_pieces)`` incl. border."""
    box_width = MIN_POPUP_WIDTH
    for line in lines:
        line_width = display_width(line)
        if box_width < line_width < width - 4:
            box_width = line_width
    if menu:
        box_width = max(box_width, option_line_length(menu))
    x = (width - box_width) // 2
    y = (height - len(lines)) // 2

    border = theme.popup_text
    rows: list[list[Piece]] = [[("┌" + "─" * box_width + "┐", border)]]
    for idx, line in enumerate(lines):
        style = theme.popup_title if idx == 0 else theme.popup_text
        rows.append([("│", border), (fit_text(line, box_width), style), ("│", border)])
    if menu:
        rows.append([("│", border), *_menu_pieces(menu, chosen, box_width, theme), ("│", border)])
    rows.append([("└" + "─" * box_width + "┘", border)])
    return x - 1, y - 1, rows


def frame_lines(frame: Frame, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Return exactly ``height`` styled screen lines for ``frame``."""
    width = max(1, width)
    height = max(1, height)
    plain: list[Piece] = [(frame.header, theme.header), (frame.path_line, theme.path_line)]
    fills = [" ", "-"]
    for row in frame.rows[: listing_rows_for_height(height)]:
        plain.append((row.text, _row_style(row, theme)))
        fills.append(" ")
    while len(plain) < height - 1:
        plain.append(("", theme.row))
        fills.append(" ")
    plain = plain[: max(0, height - 1)]
    fills = fills[: len(plain)]
    plain.append((frame.footer, theme.footer))
    fills.append(" ")

    cells = [fit_text(text, width, fill) for (text, _), fill in zip(plain, fills)]
    out = [_join_pieces([(cell, style)], width, theme) for cell, (_, style) in zip(cells, plain)]

    if frame.popup_visible:
        left, top, box_rows = popup_box(
            frame.popup_lines, frame.popup_menu, frame.popup_chosen, width, height, theme
        )
        for offset, box_pieces in enumerate(box_rows):
            y = top + offset
            if not 0 <= y < height:
                continue
            box_cols = sum(display_width(text) for text, _ in box_pieces)
            style = plain[y][1]
            pieces: list[Piece] = []
            if left > 0:
                pieces.append((slice_columns(cells[y], 0, left), style))
            skip = max(0, -left)
            for text, piece_style in box_pieces:
                if skip >= display_width(text):
                    skip -= display_width(text)
                    continue
                if skip:
                    text = slice_columns(text, skip, display_width(text))
                    skip = 0
                pieces.append((text, piece_style))
            pieces.append((slice_columns(cells[y], left + box_cols, width), style))
            out[y] = _join_pieces(pieces, width, theme)
    return out


def render_frame(frame: Frame, width: int, height: int, theme: UITheme = DEFAULT_THEME, fd: int | None = None) -> None:
    """Write ``frame`` to the terminal, one absolutely positioned line per row."""
    out: list[str] = []
    for y, line in enumerate(frame_lines(frame, width, height, theme)):
        out.append(f"\033[{y + 1};1H{line}")
    target = fd if fd is not None else 1
    os.write(target, "".join(out).encode("utf-8", errors="replace"))
