"""Read-only JSON config helpers.

The config file only supplies startup defaults for display toggles, the
initial sort, and the theme. Nothing is written back. All access is
defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .controller.navigation import DisplayOptions
from .controller.sorting import SortKey, SortOrder, parse_sort_spec

logger = logging.getLogger(__name__)

APP_NAME = "lazydu"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_BOOL_KEYS = ("show_graph", "show_counts", "show_average_size", "human_readable")


@dataclass
class StartupSettings:
    options: DisplayOptions
    sort_order: SortOrder
    theme: str | None = None


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_startup_settings() -> StartupSettings:
    """Build startup defaults, ignoring any wrongly typed config values."""
    data = load_config()
    options = DisplayOptions()
    for key in _BOOL_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            setattr(options, key, value)

    sort_order = SortOrder.by(SortKey.SIZE)
    raw_sort = data.get("sort")
    if isinstance(raw_sort, str):
        parsed = parse_sort_spec(raw_sort)
        if parsed is not None:
            sort_order = parsed

    theme = data.get("theme")
    if not isinstance(theme, str) or not theme.strip():
        theme = None
    return StartupSettings(options=options, sort_order=sort_order, theme=theme)
