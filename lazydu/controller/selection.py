"""Multi-select state for the active directory."""

from __future__ import annotations

from collections.abc import Iterator

from .viewport import ViewportState


class SelectionSet:
    """Identity keys chosen for a batch operation in the current directory.

    Each key maps to a copy of the viewport at the moment it was selected.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ViewportState] = {}

    def toggle(self, key: str, viewport: ViewportState) -> bool:
        """Flip ``key`` in or out of the set; return whether it is now selected."""
        if key in self._entries:
            del self._entries[key]
            return False
        self._entries[key] = ViewportState(viewport.cursor, viewport.offset)
        return True

    def is_selected(self, key: str) -> bool:
        return key in self._entries

    def discard(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def count(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        return list(self._entries)

    def snapshot(self, key: str) -> ViewportState | None:
        return self._entries.get(key)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
