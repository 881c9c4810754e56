from __future__ import annotations

import os
import re
import unittest

from lazydu.ansi import display_width, fit_text, slice_columns
from lazydu.controller.frame import Frame, Row
from lazydu.render import frame_lines, listing_rows_for_height, popup_box, render_frame
from lazydu.render.help import HELP_CLIPBOARD_LINE, help_text
from lazydu.ui_theme import DEFAULT_THEME, MONO_THEME, available_theme_names, resolve_theme

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def _plain(line: str) -> str:
    return ANSI_RE.sub("", line)


def _row(name: str, **kwargs) -> Row:
    return Row(flag=" ", size="     10 B", extras="", mark=" ", name=name, message="", **kwargs)


def _frame(**kwargs) -> Frame:
    defaults = dict(
        header="lazydu",
        path_line="-- root ",
        rows=[_row("a", is_cursor=True), _row("b")],
        footer="Total usage: 20 B, Objects: 2",
    )
    defaults.update(kwargs)
    return Frame(**defaults)


class AnsiHelperTests(unittest.TestCase):
    def test_wide_characters_count_double(self) -> None:
        self.assertEqual(display_width("ab"), 2)
        self.assertEqual(display_width("日本"), 4)

    def test_fit_text_pads_and_clips(self) -> None:
        self.assertEqual(fit_text("ab", 4), "ab  ")
        self.assertEqual(fit_text("abcdef", 3), "abc")
        self.assertEqual(fit_text("x", 3, "-"), "x--")
        self.assertEqual(fit_text("日本", 3), "日 ")

    def test_slice_columns(self) -> None:
        self.assertEqual(slice_columns("abcdef", 2, 4), "cd")
        self.assertEqual(slice_columns("日本", 1, 3), "  ")
        self.assertEqual(slice_columns("abc", 2, 2), "")


class FrameLinesTests(unittest.TestCase):
    def test_layout_has_exact_height_and_width(self) -> None:
        lines = frame_lines(_frame(), 40, 8)
        self.assertEqual(len(lines), 8)
        plain = [_plain(line) for line in lines]
        for line in plain:
            self.assertEqual(display_width(line), 40)
        self.assertTrue(plain[0].startswith("lazydu"))
        self.assertTrue(plain[1].startswith("-- root ---"))
        self.assertIn("a", plain[2])
        self.assertTrue(plain[-1].startswith("Total usage: 20 B"))

    def test_cursor_row_uses_cursor_style(self) -> None:
        lines = frame_lines(_frame(), 40, 8, DEFAULT_THEME)
        self.assertTrue(lines[2].startswith(DEFAULT_THEME.row_cursor))
        self.assertTrue(lines[3].startswith(DEFAULT_THEME.row))

    def test_rows_beyond_screen_are_dropped(self) -> None:
        rows = [_row(f"r{i}") for i in range(10)]
        lines = frame_lines(_frame(rows=rows), 30, 5)
        self.assertEqual(len(lines), 5)
        self.assertEqual(listing_rows_for_height(5), 2)
        self.assertTrue(_plain(lines[-1]).startswith("Total usage"))

    def test_popup_is_drawn_over_listing(self) -> None:
        frame = _frame(popup_lines=["Delete this file?", "root/a"], popup_menu=["cancel", "confirm"])
        plain = [_plain(line) for line in frame_lines(frame, 60, 12)]
        joined = "\n".join(plain)
        self.assertIn("Delete this file?", joined)
        self.assertIn("<cancel>", joined)
        self.assertIn("<confirm>", joined)
        self.assertTrue(any(line.strip().startswith("┌") for line in plain))
        for line in plain:
            self.assertEqual(display_width(line), 60)

    def test_popup_box_geometry(self) -> None:
        left, top, rows = popup_box(["Title", "text"], [], 0, 40, 20, MONO_THEME)
        self.assertEqual(len(rows), 4)
        self.assertEqual(left, (40 - 10) // 2 - 1)
        self.assertEqual(top, (20 - 2) // 2 - 1)

    def test_render_frame_positions_every_line(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            render_frame(_frame(), 20, 5, MONO_THEME, fd=write_fd)
            data = os.read(read_fd, 65536).decode("utf-8")
        finally:
            os.close(read_fd)
            os.close(write_fd)
        for y in range(1, 6):
            self.assertIn(f"\x1b[{y};1H", data)


class ThemeAndHelpTests(unittest.TestCase):
    def test_resolve_theme(self) -> None:
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme(" Mono "), MONO_THEME)
        self.assertIs(resolve_theme("unknown"), DEFAULT_THEME)
        self.assertIs(resolve_theme("default", no_color=True), MONO_THEME)
        self.assertEqual(available_theme_names(), ["default", "mono"])

    def test_help_text_mentions_clipboard_only_when_available(self) -> None:
        self.assertIn(HELP_CLIPBOARD_LINE, help_text(True))
        self.assertNotIn(HELP_CLIPBOARD_LINE, help_text(False))
        self.assertEqual(help_text(False)[0], "lazydu")


if __name__ == "__main__":
    unittest.main()
