"""Best-effort clipboard writer backed by platform copy tools."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    """Return candidate copy commands for the current platform, in preference order."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


class Clipboard:
    """Copies text with the first installed copy tool.

    ``available`` is false when no tool is installed; callers treat the
    copy action as a no-op in that case.
    """

    def __init__(self, commands: list[list[str]] | None = None) -> None:
        candidates = clipboard_commands() if commands is None else commands
        self._commands = [command for command in candidates if shutil.which(command[0]) is not None]

    @property
    def available(self) -> bool:
        return bool(self._commands)

    def write_text(self, text: str) -> bool:
        if not text:
            return False
        for command in self._commands:
            try:
                proc = subprocess.run(
                    command,
                    input=text,
                    text=True,
                    check=False,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
            except OSError as exc:
                logger.debug("clipboard command %s failed: %s", command[0], exc)
                continue
            if proc.returncode == 0:
                return True
        logger.warning("no clipboard command accepted the text")
        return False
