"""Main interactive event loop for the terminal UI.

One thread owns the controller. Each iteration redraws when something
changed, then waits for the first ready of four sources: the scan's root
directory, its completion/error, its coalesced update signal, and a key
press. Among sources that are ready together, the starting point of the
check rotates every time one is taken, so none of them can starve another.
"""

from __future__ import annotations

import logging
import select
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from queue import Empty
from typing import Any

from ..controller.frame import Frame
from ..controller.navigation import NavigationController
from ..errors import ScanError
from ..input import has_pending_input, read_key
from ..input.keys import KeyHandler
from ..render import listing_rows_for_height
from ..scan.scanner import ScanSession

logger = logging.getLogger(__name__)


class EventKind(Enum):
    ROOT = "root"
    SCAN_DONE = "scan_done"
    UPDATED = "updated"
    KEY = "key"


EVENT_ORDER: tuple[EventKind, ...] = (
    EventKind.ROOT,
    EventKind.SCAN_DONE,
    EventKind.UPDATED,
    EventKind.KEY,
)


@dataclass(frozen=True)
class LoopEvent:
    kind: EventKind
    payload: Any = None


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_seconds: float = 0.12


class EventSources:
    """Single-threaded multiplexer over a scan session and stdin."""

    def __init__(
        self,
        session: ScanSession,
        stdin_fd: int,
        read_key_fn: Callable[..., str] = read_key,
        pending_input_fn: Callable[[], bool] = has_pending_input,
        select_fn: Callable[..., Any] = select.select,
    ) -> None:
        self.session = session
        self.stdin_fd = stdin_fd
        self._read_key = read_key_fn
        self._pending_input = pending_input_fn
        self._select = select_fn
        self._rotation = 0

    def _session_pending(self) -> bool:
        session = self.session
        return not session.root.empty() or not session.errors.empty() or session.updated.pending()

    def _take(self, kind: EventKind, stdin_ready: bool) -> LoopEvent | None:
        session = self.session
        if kind is EventKind.ROOT:
            try:
                return LoopEvent(kind, session.root.get_nowait())
            except Empty:
                return None
        if kind is EventKind.SCAN_DONE:
            try:
                return LoopEvent(kind, session.errors.get_nowait())
            except Empty:
                return None
        if kind is EventKind.UPDATED:
            return LoopEvent(kind) if session.updated.consume() else None
        if not stdin_ready:
            return None
        key = self._read_key(self.stdin_fd, timeout_ms=0)
        return LoopEvent(kind, key) if key else None

    def poll(self, stdin_ready: bool) -> LoopEvent | None:
        """Take one ready event without blocking, rotating the starting source."""
        count = len(EVENT_ORDER)
        for step in range(count):
            kind = EVENT_ORDER[(self._rotation + step) % count]
            event = self._take(kind, stdin_ready)
            if event is not None:
                self._rotation = (self._rotation + step + 1) % count
                return event
        return None

    def next_event(self, timeout: float) -> LoopEvent | None:
        """Wait up to ``timeout`` seconds for any source and return one event."""
        busy = self._session_pending() or self._pending_input()
        wakeup_fd = self.session.wakeup_fd
        ready, _, _ = self._select([self.stdin_fd, wakeup_fd], [], [], 0.0 if busy else timeout)
        if wakeup_fd in ready:
            self.session.wakeup.drain()
        return self.poll(self.stdin_fd in ready or self._pending_input())


def run_main_loop(
    controller: NavigationController,
    terminal: Any,
    sources: EventSources,
    render: Callable[[Frame, int, int], None],
    key_handler: KeyHandler | None = None,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the interactive loop until a quit key or a fatal scan error.

    A fatal scan error is raised as ``ScanError``; the terminal is restored
    by ``terminal.raw_mode()`` on the way out.
    """
    keys = key_handler if key_handler is not None else KeyHandler(controller, terminal.clear_screen)
    last_size: tuple[int, int] | None = None
    dirty = True
    with terminal.raw_mode():
        while True:
            size = terminal.size()
            if size != last_size:
                last_size = size
                controller.set_visible_rows(listing_rows_for_height(size[1]))
                dirty = True
            if dirty:
                render(controller.frame(), size[0], size[1])
                dirty = False

            event = sources.next_event(timing.poll_seconds)
            if event is None:
                continue
            dirty = True
            if event.kind is EventKind.ROOT:
                controller.set_root(event.payload)
            elif event.kind is EventKind.SCAN_DONE:
                if event.payload is not None:
                    logger.error("directory listing failed: %s", event.payload)
                    raise ScanError(f"directory listing: {event.payload}") from event.payload
                logger.info("directory listing complete")
                controller.finish_listing()
            elif event.kind is EventKind.UPDATED:
                controller.sort_current_dir()
            elif event.kind is EventKind.KEY:
                if keys.handle(event.payload):
                    break
