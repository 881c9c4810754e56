"""Key bindings for the browser.

Popup-aware keys (quit, left/right, enter) are resolved here so the
controller only sees intent-level calls.
"""

from __future__ import annotations

from collections.abc import Callable

from ..controller.navigation import NavigationController
from ..controller.sorting import SortKey
from .key_registry import KeyBinding, KeyMap


def _noop() -> None:
    return None


class KeyHandler:
    """Dispatch one decoded key token against a controller.

    ``handle`` returns ``True`` when the session should end.
    """

    def __init__(
        self,
        controller: NavigationController,
        refresh_screen: Callable[[], None] = _noop,
    ) -> None:
        self.controller = controller
        self.refresh_screen = refresh_screen
        c = controller

        def quit_or_close() -> bool:
            if c.popup.visible:
                c.popup.dismiss()
                return False
            return True

        def left() -> bool:
            if c.popup.visible:
                c.popup.move_choice(-1)
            else:
                c.ascend()
            return False

        def right() -> bool:
            if c.popup.visible:
                c.popup.move_choice(1)
            else:
                c.enter_child()
            return False

        def enter() -> bool:
            if c.popup.menu:
                c.confirm_popup()
            else:
                c.enter_child()
            return False

        def action(fn: Callable[[], object]) -> Callable[[], bool]:
            def run() -> bool:
                fn()
                return False

            return run

        self.keymap = KeyMap(
            [
                KeyBinding(("ESC", "CTRL_C", "q"), "quit", quit_or_close),
                KeyBinding(("DOWN", "j"), "down", action(lambda: c.move(1))),
                KeyBinding(("UP", "k"), "up", action(lambda: c.move(-1))),
                KeyBinding(("PAGE_DOWN", "-", "_"), "page_down", action(c.page_down)),
                KeyBinding(("PAGE_UP", "=", "+"), "page_up", action(c.page_up)),
                KeyBinding(("LEFT", "h"), "left", left),
                KeyBinding(("RIGHT", "l"), "right", right),
                KeyBinding(("ENTER",), "enter", enter),
                KeyBinding(("c",), "toggle_counts", action(c.toggle_counts)),
                KeyBinding(("g",), "toggle_graph", action(c.toggle_graph)),
                KeyBinding(("a",), "toggle_average_size", action(c.toggle_average_size)),
                KeyBinding(("u",), "toggle_human_readable", action(c.toggle_human_readable)),
                KeyBinding(("n",), "sort_name", action(lambda: c.toggle_sort(SortKey.NAME))),
                KeyBinding(("s",), "sort_size", action(lambda: c.toggle_sort(SortKey.SIZE))),
                KeyBinding(("C",), "sort_count", action(lambda: c.toggle_sort(SortKey.COUNT))),
                KeyBinding(("A",), "sort_average_size", action(lambda: c.toggle_sort(SortKey.AVERAGE_SIZE))),
                KeyBinding(("v",), "toggle_select_for_cursor", action(c.toggle_select_for_cursor)),
                KeyBinding(("V",), "toggle_visual_select", action(c.toggle_visual_select)),
                KeyBinding(("y",), "copy_path", action(c.copy_path)),
                KeyBinding(("Y",), "display_path", action(c.display_path)),
                KeyBinding(("d",), "delete", action(c.delete_single)),
                KeyBinding(("D",), "delete_selected", action(c.delete_selected)),
                KeyBinding(("?",), "toggle_help", action(c.toggle_help)),
                KeyBinding(("CTRL_L",), "refresh_screen", action(lambda: self.refresh_screen())),
            ]
        )

    def handle(self, key: str) -> bool:
        return self.keymap.dispatch(key)
