"""Background discovery engine and the in-memory tree it populates."""

from .scanner import ScanSession, UpdateSignal, WakeupPipe, scan
from .tree import Dir
from .types import Entry, EntryAttrs, EntryKind

__all__ = [
    "Dir",
    "Entry",
    "EntryAttrs",
    "EntryKind",
    "ScanSession",
    "UpdateSignal",
    "WakeupPipe",
    "scan",
]
