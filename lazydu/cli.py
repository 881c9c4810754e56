"""Command-line front door for lazydu.

Parses CLI options, merges them over config-file defaults, and dispatches
into the interactive disk-usage browser.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_startup_settings
from .controller.sorting import SortKey, parse_sort_spec
from .errors import ScanError
from .runtime import run_browser
from .ui_theme import available_theme_names, resolve_theme

SORT_CHOICES = tuple(key.value for key in SortKey)


def _sort_spec(value: str):
    """argparse type for ``KEY`` or ``-KEY`` sort specifications."""
    parsed = parse_sort_spec(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(
            f"invalid sort key: {value!r} (choose from {', '.join(SORT_CHOICES)}, optionally prefixed by '-')"
        )
    return parsed


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("lazydu")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydu",
        description="Browse disk usage of a directory tree in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to scan. Defaults to current directory.")
    parser.add_argument(
        "--sort",
        type=_sort_spec,
        default=None,
        metavar="KEY",
        help=f"Initial sort ({', '.join(SORT_CHOICES)}); prefix with '-' to reverse.",
    )
    parser.add_argument("--show-counts", action="store_true", help="Show the entry count column.")
    parser.add_argument("--show-average-size", action="store_true", help="Show the average size column.")
    parser.add_argument("--no-graph", action="store_true", help="Hide the usage bar graph.")
    parser.add_argument(
        "--no-human-readable",
        action="store_true",
        help="Show raw byte and entry counts instead of unit suffixes.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--trash", action="store_true", help="Move deleted items to the trash instead of removing them.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Append debug logs to PATH.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    _configure_logging(args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    if not sys.stdin.isatty():
        raise SystemExit("lazydu needs an interactive terminal on stdin.")

    settings = load_startup_settings()
    options = settings.options
    if args.show_counts:
        options.show_counts = True
    if args.show_average_size:
        options.show_average_size = True
    if args.no_graph:
        options.show_graph = False
    if args.no_human_readable:
        options.human_readable = False
    if args.sort is not None:
        settings.sort_order = args.sort

    theme = resolve_theme(args.theme if args.theme is not None else settings.theme, no_color=args.no_color)
    try:
        run_browser(path, settings, theme, trash=args.trash)
    except ScanError as exc:
        raise SystemExit(f"lazydu {exc}") from exc
