"""Key tables for the dashboard view.

The view layers two tables: fixed view keys (quit, refresh, movement) and the
current document's shortcut keys, which are replaced wholesale every time a
new document is rendered.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """One handler reachable from any of ``keys``."""

    keys: tuple[str, ...]
    handler: Callable[[], object]


class KeyMap:
    def __init__(self, *bindings: KeyBinding) -> None:
        self._handlers: dict[str, Callable[[], object]] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> None:
        for key in binding.keys:
            if key in self._handlers:
                raise ValueError(f"key {key!r} is bound twice")
            self._handlers[key] = binding.handler

    def rebind(self, bindings: Iterable[KeyBinding]) -> None:
        """Drop every binding, then bind ``bindings``."""
        self._handlers.clear()
        for binding in bindings:
            self.bind(binding)

    def keys(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def dispatch(self, key: str) -> bool:
        """Run the handler for ``key``; ``False`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
