"""In-memory directory tree populated by the background scanner.

Every ``Dir`` of one tree shares a single re-entrant lock. Each accessor is
atomic on its own; two calls in a row may observe different totals while a
scan is still attaching subdirectories.
"""

from __future__ import annotations

import posixpath
import threading
from collections.abc import Iterable

from .types import Entry, EntryAttrs, EntryKind


class Dir:
    """One listed directory plus cumulative totals for its whole subtree."""

    def __init__(
        self,
        parent: Dir | None,
        path: str,
        entries: Iterable[Entry] = (),
        read_error: Exception | None = None,
    ) -> None:
        self._parent = parent
        self._lock = parent._lock if parent is not None else threading.RLock()
        self.path = path
        self.read_error = read_error
        self._entries: list[Entry] = list(entries)
        self._dirs: dict[str, Dir] = {}
        self.size = 0
        self.count = 0
        self.count_unknown_size = 0
        self.entries_have_errors = False
        self.detached = False
        for entry in self._entries:
            if entry.kind is not EntryKind.LEAF:
                continue
            self.count += 1
            if entry.size < 0:
                self.count_unknown_size += 1
            else:
                self.size += entry.size

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def parent(self) -> Dir | None:
        return self._parent

    def children(self) -> list[Entry]:
        """Return a copy of the child listing in discovery order."""
        with self._lock:
            return list(self._entries)

    def attrs(self) -> tuple[int, int]:
        """Return ``(size, count)`` totals for this directory."""
        with self._lock:
            return self.size, self.count

    def attrs_at(self, index: int) -> tuple[EntryAttrs, Exception | None]:
        """Return attributes of child ``index`` and its read error, if any.

        Directories that have not been listed yet report ``readable=False``.
        """
        with self._lock:
            entry = self._entries[index]
            if entry.kind is EntryKind.LEAF:
                if entry.size < 0:
                    return EntryAttrs(count=1, count_unknown_size=1), None
                return EntryAttrs(size=entry.size, count=1), None
            sub = self._dirs.get(entry.name)
            if sub is None:
                return EntryAttrs(is_dir=True, readable=False), None
            return (
                EntryAttrs(
                    size=sub.size,
                    count=sub.count,
                    count_unknown_size=sub.count_unknown_size,
                    is_dir=True,
                    readable=True,
                    entries_have_errors=sub.entries_have_errors,
                ),
                sub.read_error,
            )

    def directory_at(self, index: int) -> Dir | None:
        """Resolve child ``index`` to its ``Dir`` when it is a listed directory."""
        with self._lock:
            entry = self._entries[index]
            if entry.kind is not EntryKind.DIRECTORY:
                return None
            return self._dirs.get(entry.name)

    def attach(self, child: Dir) -> None:
        """Link a freshly listed subdirectory and fold its totals into ancestors.

        A child whose entry was removed meanwhile is detached instead.
        """
        with self._lock:
            if not any(
                entry.kind is EntryKind.DIRECTORY and entry.remote == child.path for entry in self._entries
            ):
                child.detached = True
                return
            self._dirs[child.name] = child
            has_errors = child.read_error is not None or child.entries_have_errors
            node: Dir | None = self
            while node is not None:
                node.size += child.size
                node.count += child.count
                node.count_unknown_size += child.count_unknown_size
                if has_errors:
                    node.entries_have_errors = True
                if node.detached:
                    break
                node = node._parent

    def remove_child_at(self, index: int) -> None:
        """Drop child ``index`` and subtract its totals from this dir and ancestors."""
        with self._lock:
            entry = self._entries[index]
            size = max(entry.size, 0)
            count = 1
            count_unknown_size = 1 if entry.size < 0 else 0
            if entry.kind is EntryKind.DIRECTORY:
                size = count = count_unknown_size = 0
                sub = self._dirs.pop(entry.name, None)
                if sub is not None:
                    sub.detached = True
                    size = sub.size
                    count = sub.count
                    count_unknown_size = sub.count_unknown_size
            del self._entries[index]
            node: Dir | None = self
            while node is not None:
                node.size -= size
                node.count -= count
                node.count_unknown_size -= count_unknown_size
                node.entries_have_errors = any(
                    sub.read_error is not None or sub.entries_have_errors
                    for sub in node._dirs.values()
                )
                node = node._parent

    def __repr__(self) -> str:
        return f"Dir(path={self.path!r}, entries={len(self._entries)})"
