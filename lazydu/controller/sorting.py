"""Sort keys and display-permutation computation for one directory listing."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key

from ..scan.types import Entry, EntryAttrs


class SortKey(Enum):
    NAME = "name"
    SIZE = "size"
    COUNT = "count"
    AVERAGE_SIZE = "average_size"


def _default_directions() -> dict[SortKey, int]:
    return {key: 0 for key in SortKey}


@dataclass
class SortOrder:
    """Direction sign per key: ``+1`` primary order, ``-1`` reversed, ``0`` off.

    Primary order is A to Z for names and largest first for numeric keys.
    At most one key is non-zero at a time.
    """

    directions: dict[SortKey, int] = field(default_factory=_default_directions)

    @classmethod
    def by(cls, key: SortKey, direction: int = 1) -> SortOrder:
        order = cls()
        order.directions[key] = 1 if direction >= 0 else -1
        return order

    def active(self) -> tuple[SortKey, int] | None:
        for key in SortKey:
            direction = self.directions.get(key, 0)
            if direction:
                return key, direction
        return None

    def direction(self, key: SortKey) -> int:
        return self.directions.get(key, 0)

    def toggle(self, key: SortKey) -> None:
        """Activate ``key`` (or flip it if already active) and reset all others."""
        old = self.directions.get(key, 0)
        self.directions = _default_directions()
        self.directions[key] = 1 if old == 0 else -old


def _numeric_value(attrs: EntryAttrs, key: SortKey) -> float:
    if key is SortKey.SIZE:
        return attrs.size
    if key is SortKey.COUNT:
        return attrs.count
    return attrs.average_size


def compute_permutation(
    children: Sequence[Entry],
    attrs: Sequence[EntryAttrs],
    order: SortOrder,
) -> tuple[list[int], list[int]]:
    """Return ``(perm, inverse)`` ordering ``children`` for display.

    ``perm[rank]`` is a child index and ``inverse[child_index]`` its rank.
    ``attrs`` must be a snapshot taken once for this sort so the comparator
    stays consistent while the scanner keeps updating totals.
    """
    names = [child.remote for child in children]
    active = order.active()

    def compare(i: int, j: int) -> int:
        if active is not None:
            key, direction = active
            if key is SortKey.NAME:
                if names[i] != names[j]:
                    before = names[i] < names[j]
                    return (-1 if before else 1) * direction
            else:
                a = _numeric_value(attrs[i], key)
                b = _numeric_value(attrs[j], key)
                if a != b:
                    # Primary numeric order is largest first.
                    return (-1 if a > b else 1) * direction
        if names[i] < names[j]:
            return -1
        if names[i] > names[j]:
            return 1
        return 0

    perm = sorted(range(len(children)), key=cmp_to_key(compare))
    inverse = [0] * len(perm)
    for rank, index in enumerate(perm):
        inverse[index] = rank
    return perm, inverse


def parse_sort_spec(value: str) -> SortOrder | None:
    """Parse ``"size"`` / ``"-name"`` style config values into a ``SortOrder``."""
    text = value.strip().lower()
    direction = 1
    if text.startswith("-"):
        direction = -1
        text = text[1:]
    for key in SortKey:
        if key.value == text:
            return SortOrder.by(key, direction)
    return None
