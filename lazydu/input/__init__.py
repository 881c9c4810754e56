"""Input-layer public API for key decoding and key dispatch."""

from .key_registry import KeyBinding, KeyMap
from .keys import KeyHandler
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, has_pending_input, read_key

__all__ = [
    "read_key",
    "has_pending_input",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyMap",
    "KeyHandler",
]
