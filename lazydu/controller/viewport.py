"""Per-directory cursor and scroll offset bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ViewportState:
    cursor: int = 0
    offset: int = 0


class ViewportTracker:
    """Remembers where the cursor was in every visited directory.

    States are keyed by display path, created on first visit, and never
    reset, so returning to a directory restores its cursor and scroll.
    """

    def __init__(self, visible_rows: int = 20) -> None:
        self.visible_rows = max(1, visible_rows)
        self._states: dict[str, ViewportState] = {}

    def state_for(self, path: str) -> ViewportState:
        state = self._states.get(path)
        if state is None:
            state = ViewportState()
            self._states[path] = state
        return state

    def move(self, path: str, delta: int, child_count: int) -> ViewportState:
        """Move the cursor by ``delta`` rows, scrolling by the same amount if needed.

        Scrolling is a minimal shift rather than a recenter, so page moves
        scroll by exactly one page.
        """
        state = self.state_for(path)
        if child_count <= 0:
            state.cursor = 0
            state.offset = 0
            return state

        step = abs(delta)
        state.cursor = max(0, min(state.cursor + delta, child_count - 1))

        on_screen = state.cursor - state.offset
        if on_screen < 0:
            state.offset -= step
        elif on_screen >= self.visible_rows:
            state.offset += step
        state.offset = max(0, min(state.offset, child_count - 1))

        # A resize or a shrunken listing can leave the window stale.
        if state.cursor < state.offset:
            state.offset = state.cursor
        elif state.cursor - state.offset >= self.visible_rows:
            state.offset = state.cursor - self.visible_rows + 1
        return state
