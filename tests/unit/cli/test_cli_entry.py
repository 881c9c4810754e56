"""CLI argument handling and startup-settings merge tests."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydu import cli
from lazydu.config import StartupSettings
from lazydu.controller.navigation import DisplayOptions
from lazydu.controller.sorting import SortKey, SortOrder
from lazydu.errors import ScanError
from lazydu.ui_theme import DEFAULT_THEME, MONO_THEME


def _settings(theme: str | None = None) -> StartupSettings:
    return StartupSettings(options=DisplayOptions(), sort_order=SortOrder.by(SortKey.SIZE), theme=theme)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        patchers = (
            mock.patch("lazydu.cli.load_startup_settings", side_effect=lambda: _settings()),
            mock.patch.object(sys, "stdin", mock.Mock(isatty=mock.Mock(return_value=True))),
        )
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def _run(self, *argv: str, default_path: Path | None = None):
        with mock.patch.object(sys, "argv", ["lazydu", *argv]), mock.patch("lazydu.cli.run_browser") as run_browser:
            cli.main(default_path=default_path)
        run_browser.assert_called_once()
        return run_browser.call_args

    def test_defaults_to_current_working_directory(self) -> None:
        previous = Path.cwd()
        try:
            os.chdir(self.root)
            call = self._run()
        finally:
            os.chdir(previous)
        path, settings, theme = call.args
        self.assertEqual(path.resolve(), self.root)
        self.assertEqual(settings.sort_order.active(), (SortKey.SIZE, 1))
        self.assertIs(theme, DEFAULT_THEME)
        self.assertFalse(call.kwargs["trash"])

    def test_flags_override_settings(self) -> None:
        call = self._run(
            str(self.root),
            "--sort",
            "-count",
            "--show-counts",
            "--show-average-size",
            "--no-graph",
            "--no-human-readable",
            "--no-color",
            "--trash",
        )
        path, settings, theme = call.args
        self.assertEqual(path, self.root)
        self.assertEqual(settings.sort_order.active(), (SortKey.COUNT, -1))
        self.assertTrue(settings.options.show_counts)
        self.assertTrue(settings.options.show_average_size)
        self.assertFalse(settings.options.show_graph)
        self.assertFalse(settings.options.human_readable)
        self.assertIs(theme, MONO_THEME)
        self.assertTrue(call.kwargs["trash"])

    def test_theme_comes_from_config_unless_given(self) -> None:
        with mock.patch("lazydu.cli.load_startup_settings", return_value=_settings("mono")):
            call = self._run(str(self.root))
        self.assertIs(call.args[2], MONO_THEME)
        call = self._run(str(self.root), "--theme", "default")
        self.assertIs(call.args[2], DEFAULT_THEME)

    def test_invalid_sort_key_exits(self) -> None:
        with mock.patch.object(sys, "argv", ["lazydu", "--sort", "colour"]), mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                cli.main(default_path=self.root)

    def test_missing_path_and_file_path_exit(self) -> None:
        (self.root / "file.txt").write_text("x", encoding="utf-8")
        for argv in ([str(self.root / "missing")], [str(self.root / "file.txt")]):
            with mock.patch.object(sys, "argv", ["lazydu", *argv]), mock.patch("lazydu.cli.run_browser") as run_browser:
                with self.assertRaises(SystemExit):
                    cli.main()
            run_browser.assert_not_called()

    def test_non_tty_stdin_exits(self) -> None:
        with mock.patch.object(sys, "stdin", mock.Mock(isatty=mock.Mock(return_value=False))):
            with mock.patch.object(sys, "argv", ["lazydu", str(self.root)]), mock.patch("lazydu.cli.run_browser") as run_browser:
                with self.assertRaises(SystemExit):
                    cli.main()
        run_browser.assert_not_called()

    def test_scan_error_becomes_exit_message(self) -> None:
        with mock.patch.object(sys, "argv", ["lazydu", str(self.root)]), mock.patch(
            "lazydu.cli.run_browser", side_effect=ScanError("directory listing: permission denied")
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()
        self.assertEqual(ctx.exception.code, "lazydu directory listing: permission denied")

    def test_log_file_attaches_handler(self) -> None:
        log_path = self.root / "lazydu.log"
        package_logger = logging.getLogger("lazydu")
        before = list(package_logger.handlers)
        level = package_logger.level
        try:
            self._run(str(self.root), "--log-file", str(log_path))
            added = [handler for handler in package_logger.handlers if handler not in before]
            self.assertEqual(len(added), 1)
            self.assertIsInstance(added[0], logging.FileHandler)
        finally:
            for handler in list(package_logger.handlers):
                if handler not in before:
                    package_logger.removeHandler(handler)
                    handler.close()
            package_logger.setLevel(level)


if __name__ == "__main__":
    unittest.main()
