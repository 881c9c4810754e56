"""Key map from decoded key tokens to browser actions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

KeyAction = Callable[[], bool]


@dataclass(frozen=True)
class KeyBinding:
    """One named action reachable from one or more key tokens.

    The action returns ``True`` when the session should end.
    """

    keys: tuple[str, ...]
    name: str
    action: KeyAction


class KeyMap:
    """Exact-token dispatch table; a token may be bound only once."""

    def __init__(self, bindings: Iterable[KeyBinding] = ()) -> None:
        self._by_key: dict[str, KeyBinding] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> None:
        for key in binding.keys:
            existing = self._by_key.get(key)
            if existing is not None:
                raise ValueError(f"key {key!r} already bound to {existing.name}")
            self._by_key[key] = binding

    def binding_for(self, key: str) -> KeyBinding | None:
        return self._by_key.get(key)

    def bound_keys(self) -> list[str]:
        return sorted(self._by_key)

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; unbound keys are ignored."""
        binding = self._by_key.get(key)
        if binding is None:
            logger.debug("unbound key %r", key)
            return False
        return bool(binding.action())
