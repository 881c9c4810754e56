"""Modal popup workflow for confirmable and informational messages.

A popup is either *confirmable* (it carries a cancel/confirm menu and a
handler) or *informational* (text only). Confirming runs the handler
synchronously and replaces the popup with its result or error text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import BackendError

logger = logging.getLogger(__name__)

CONFIRM_MENU: tuple[str, ...] = ("cancel", "confirm")
CONFIRM_OPTION = 1

ConfirmHandler = Callable[[Any, str, int], str]


class PopupState(Enum):
    IDLE = "idle"
    STAGED = "staged"


@dataclass
class PendingAction:
    """Popup content plus the handler that runs when the user confirms."""

    title: str
    detail: list[str]
    on_confirm: ConfirmHandler | None = None
    menu: list[str] = field(default_factory=lambda: list(CONFIRM_MENU))
    chosen: int = 0

    @property
    def lines(self) -> list[str]:
        return [self.title, *self.detail]


class ConfirmationWorkflow:
    def __init__(self) -> None:
        self.action: PendingAction | None = None

    @property
    def state(self) -> PopupState:
        return PopupState.STAGED if self.action is not None else PopupState.IDLE

    @property
    def visible(self) -> bool:
        return self.action is not None

    @property
    def lines(self) -> list[str]:
        return self.action.lines if self.action is not None else []

    @property
    def menu(self) -> list[str]:
        if self.action is None or self.action.on_confirm is None:
            return []
        return self.action.menu

    @property
    def chosen(self) -> int:
        return self.action.chosen if self.action is not None else 0

    def stage(self, action: PendingAction) -> None:
        action.chosen = 0
        self.action = action

    def show_info(self, lines: list[str]) -> None:
        """Replace any popup with a menu-less informational one."""
        title, *detail = lines or [""]
        self.action = PendingAction(title, list(detail), on_confirm=None, menu=[])

    def toggle_info(self, lines: list[str]) -> None:
        """Show ``lines``, or hide the popup if exactly these lines are showing."""
        if self.action is not None and self.action.lines == list(lines):
            self.dismiss()
            return
        self.show_info(lines)

    def move_choice(self, delta: int) -> None:
        """Move the highlighted menu option left or right, clamped to the menu."""
        menu = self.menu
        if not menu or self.action is None:
            return
        step = 1 if delta > 0 else -1
        self.action.chosen = max(0, min(self.action.chosen + step, len(menu) - 1))

    def dismiss(self) -> None:
        """Close the popup; for a confirmable popup this is an implicit cancel."""
        self.action = None

    def confirm(self, backend: Any, path: str) -> bool:
        """Run the staged handler with the highlighted option.

        Returns ``False`` when nothing confirmable is staged. Backend failures
        are shown as an error popup; the tree is left as the handler left it.
        """
        action = self.action
        if action is None or action.on_confirm is None:
            return False
        handler = action.on_confirm
        option = action.chosen
        self.action = None
        try:
            message = handler(backend, path, option)
        except BackendError as exc:
            logger.warning("%s failed: %s", action.title, exc)
            self.show_info(["error:", str(exc)])
            return True
        self.show_info(["Finished:", message])
        return True
