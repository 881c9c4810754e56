"""Background discovery worker.

Walks the backend breadth-first on a daemon thread and publishes three event
sources: the root directory (once), completion or a fatal error (once), and
a coalescing "subtree changed" signal. Every publication also writes a byte
to a wakeup pipe so the UI loop can ``select()`` on it next to stdin.
"""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from queue import Queue
from typing import Protocol

from ..errors import BackendError, ScanError
from .tree import Dir
from .types import Entry, EntryKind

logger = logging.getLogger(__name__)


class ListingBackend(Protocol):
    name: str

    def list_dir(self, remote: str) -> list[Entry]: ...


class WakeupPipe:
    """Self-pipe used to wake a ``select()`` call from another thread."""

    def __init__(self) -> None:
        self.read_fd, self._write_fd = os.pipe()
        os.set_blocking(self.read_fd, False)
        os.set_blocking(self._write_fd, False)
        self._closed = False

    def wake(self) -> None:
        if self._closed:
            return
        try:
            os.write(self._write_fd, b"\x00")
        except BlockingIOError:
            # Pipe already full of wakeups; the reader will drain it anyway.
            pass

    def drain(self) -> None:
        try:
            while os.read(self.read_fd, 4096):
                pass
        except BlockingIOError:
            pass

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        os.close(self._write_fd)
        os.close(self.read_fd)


class UpdateSignal:
    """Coalescing flag: many ``fire`` calls collapse into one ``consume``."""

    def __init__(self, wakeup: WakeupPipe | None = None) -> None:
        self._event = threading.Event()
        self._wakeup = wakeup

    def fire(self) -> None:
        self._event.set()
        if self._wakeup is not None:
            self._wakeup.wake()

    def pending(self) -> bool:
        return self._event.is_set()

    def consume(self) -> bool:
        if not self._event.is_set():
            return False
        self._event.clear()
        return True


class ScanSession:
    """Handle to one running scan."""

    def __init__(self) -> None:
        self.wakeup = WakeupPipe()
        self.root: Queue[Dir] = Queue(maxsize=1)
        self.errors: Queue[Exception | None] = Queue(maxsize=1)
        self.updated = UpdateSignal(self.wakeup)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def wakeup_fd(self) -> int:
        return self.wakeup.read_fd

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def publish_root(self, root: Dir) -> None:
        self.root.put(root)
        self.wakeup.wake()

    def publish_result(self, error: Exception | None) -> None:
        self.errors.put(error)
        self.wakeup.wake()

    def cancel(self) -> None:
        """Ask the worker to stop at the next directory boundary."""
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def close(self) -> None:
        """Release the wakeup pipe once the worker thread has exited."""
        if self._thread is not None and self._thread.is_alive():
            return
        self.wakeup.close()


def _walk(backend: ListingBackend, session: ScanSession) -> None:
    logger.info("scan started on %s", backend.name)
    try:
        root = Dir(None, "", backend.list_dir(""))
    except BackendError as exc:
        logger.error("cannot list root of %s: %s", backend.name, exc)
        session.publish_result(ScanError(str(exc)))
        return
    session.publish_root(root)

    pending: deque[Dir] = deque([root])
    listed = 1
    while pending:
        if session.cancelled:
            logger.info("scan cancelled after %d directories", listed)
            return
        parent = pending.popleft()
        if parent.detached:
            continue
        for entry in parent.children():
            if entry.kind is not EntryKind.DIRECTORY:
                continue
            if session.cancelled:
                break
            try:
                child = Dir(parent, entry.remote, backend.list_dir(entry.remote))
            except BackendError as exc:
                logger.warning("cannot list %s: %s", entry.remote, exc)
                child = Dir(parent, entry.remote, read_error=exc)
            else:
                pending.append(child)
            parent.attach(child)
            listed += 1
            session.updated.fire()
    logger.info("scan finished: %d directories listed", listed)
    session.publish_result(None)


def scan(backend: ListingBackend) -> ScanSession:
    """Start discovery of ``backend`` on a daemon thread and return its session."""
    session = ScanSession()

    def worker() -> None:
        try:
            _walk(backend, session)
        except Exception as exc:
            logger.exception("scan worker crashed")
            if session.errors.empty():
                session.publish_result(ScanError(f"scan worker crashed: {exc}"))

    thread = threading.Thread(target=worker, name="lazydu-scan", daemon=True)
    session._thread = thread
    thread.start()
    return session
