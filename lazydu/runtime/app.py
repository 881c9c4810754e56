"""Interactive browser composition.

Wires the backend, background scan, controller, terminal, and renderer
together and runs the main loop until the user quits.
"""

from __future__ import annotations

import logging
import sys
from functools import partial
from pathlib import Path

from ..backend import LocalBackend
from ..clipboard import Clipboard
from ..config import StartupSettings
from ..controller.navigation import NavigationController
from ..input.keys import KeyHandler
from ..render import render_frame
from ..scan import scan
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .loop import EventSources, RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)

SCAN_SHUTDOWN_SECONDS = 1.0


def run_browser(
    path: Path,
    settings: StartupSettings,
    theme: UITheme,
    trash: bool = False,
) -> None:
    """Scan ``path`` in the background and browse it interactively.

    Raises ``ScanError`` when the root directory cannot be listed.
    """
    backend = LocalBackend(path, trash=trash)
    controller = NavigationController(
        backend,
        clipboard=Clipboard(),
        options=settings.options,
        sort_order=settings.sort_order,
    )
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    session = scan(backend)
    try:
        run_main_loop(
            controller,
            terminal,
            EventSources(session, stdin_fd),
            render=partial(render_frame, theme=theme, fd=stdout_fd),
            key_handler=KeyHandler(controller, terminal.clear_screen),
            timing=RuntimeLoopTiming(),
        )
    finally:
        session.cancel()
        session.join(SCAN_SHUTDOWN_SECONDS)
        session.close()
        logger.info("session ended")
