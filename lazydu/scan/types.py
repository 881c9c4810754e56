"""Entry datatypes shared by the backend, the discovery tree, and the UI."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum


class EntryKind(Enum):
    """Whether a listed entry is a plain object or a directory."""

    LEAF = "leaf"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Entry:
    """One listed child of a directory.

    ``remote`` is the backend-relative POSIX path and doubles as the entry's
    identity key. ``size`` is only meaningful for leaves; ``-1`` marks a leaf
    whose size could not be determined.
    """

    remote: str
    kind: EntryKind
    size: int = -1

    @property
    def name(self) -> str:
        return posixpath.basename(self.remote)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def __str__(self) -> str:
        return self.remote


@dataclass(frozen=True)
class EntryAttrs:
    """Aggregate attributes of one child as seen from its parent listing."""

    size: int = 0
    count: int = 0
    count_unknown_size: int = 0
    is_dir: bool = False
    readable: bool = True
    entries_have_errors: bool = False

    @property
    def average_size(self) -> float:
        if self.count <= 0:
            return 0.0
        return self.size / self.count
