"""Terminal mode, clipboard, and browser bootstrap tests.

These cover the process-facing edges: tty state, copy tools, and the
composition that ties the scan session to the main loop.
"""

from __future__ import annotations

import subprocess
import tempfile
import termios
import unittest
from pathlib import Path
from unittest import mock

from lazydu.clipboard import Clipboard
from lazydu.config import StartupSettings
from lazydu.controller.navigation import DisplayOptions
from lazydu.controller.sorting import SortKey, SortOrder
from lazydu.runtime import app
from lazydu.terminal import TerminalController
from lazydu.ui_theme import MONO_THEME


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazydu.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazydu.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazydu.terminal.os.write") as write_mock, mock.patch(
            "lazydu.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l\x1b[2J"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[0m\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazydu.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


class ClipboardTests(unittest.TestCase):
    def test_unavailable_when_no_tool_is_installed(self) -> None:
        with mock.patch("lazydu.clipboard.shutil.which", return_value=None):
            clipboard = Clipboard([["pbcopy"]])
        self.assertFalse(clipboard.available)
        self.assertFalse(clipboard.write_text("/data"))

    def test_write_text_falls_through_failing_tools(self) -> None:
        with mock.patch("lazydu.clipboard.shutil.which", return_value="/usr/bin/tool"):
            clipboard = Clipboard([["first"], ["second"]])
        results = [subprocess.CompletedProcess(["first"], 1), subprocess.CompletedProcess(["second"], 0)]
        with mock.patch("lazydu.clipboard.subprocess.run", side_effect=results) as run:
            self.assertTrue(clipboard.write_text("/data/sub"))
        self.assertEqual([call.args[0] for call in run.call_args_list], [["first"], ["second"]])
        self.assertEqual(run.call_args_list[0].kwargs["input"], "/data/sub")


class RunBrowserTests(unittest.TestCase):
    def test_scan_session_is_shut_down_after_loop(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            settings = StartupSettings(options=DisplayOptions(), sort_order=SortOrder.by(SortKey.NAME))
            session = mock.Mock()
            with mock.patch.object(app, "scan", return_value=session), mock.patch.object(
                app, "TerminalController"
            ), mock.patch.object(app, "run_main_loop", side_effect=RuntimeError("boom")) as loop, mock.patch.object(
                app.sys, "stdin"
            ), mock.patch.object(app.sys, "stdout"):
                with self.assertRaises(RuntimeError):
                    app.run_browser(Path(tmp), settings, MONO_THEME)

        controller = loop.call_args.args[0]
        self.assertEqual(controller.sort_order.active(), (SortKey.NAME, 1))
        self.assertEqual(controller.fs_name, Path(tmp).resolve().as_posix())
        session.cancel.assert_called_once_with()
        session.join.assert_called_once_with(app.SCAN_SHUTDOWN_SECONDS)
        session.close.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
