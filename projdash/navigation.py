"""Cursor state machine over a rendered dashboard document.

The controller owns the current document and the cursor line. It never runs
actions itself: activation returns the bound :class:`Action` and the caller
hands it to the host.
"""

from __future__ import annotations

from collections.abc import Callable

from .actions import Action
from .document import DashboardDocument, ShortcutKind


class NavigationError(Exception):
    """User-facing navigation failure, shown as a short status message."""


class NavigationController:
    def __init__(self, render: Callable[[], DashboardDocument]) -> None:
        self._render = render
        self.document: DashboardDocument | None = None
        self.cursor = 0

    def _require_document(self) -> DashboardDocument:
        if self.document is None:
            raise NavigationError("Dashboard is not open")
        return self.document

    def _clamp(self, line: int) -> int:
        document = self._require_document()
        return max(0, min(line, document.line_count() - 1))

    def open(self) -> DashboardDocument:
        """Render a fresh document and put the cursor below the title block."""
        self.document = self._render()
        self.cursor = self._clamp(self.document.content_start)
        return self.document

    def refresh(self) -> DashboardDocument:
        """Re-render, keeping the cursor line clamped to the new length."""
        previous = self.cursor
        self.document = self._render()
        self.cursor = self._clamp(previous)
        return self.document

    def move_to(self, line: int) -> None:
        self.cursor = self._clamp(line)

    def next_item(self) -> bool:
        """Move to the next activatable line; stay put when there is none."""
        for index in self._require_document().activatable_lines():
            if index > self.cursor:
                self.cursor = index
                return True
        return False

    def prev_item(self) -> bool:
        """Move to the previous activatable line; stay put when there is none."""
        for index in reversed(self._require_document().activatable_lines()):
            if index < self.cursor:
                self.cursor = index
                return True
        return False

    def activate_item(self) -> Action:
        action = self._require_document().action_at(self.cursor)
        if action is None:
            raise NavigationError("No action on this line")
        return action

    def press(self, key: str) -> Action | None:
        """Apply a document shortcut.

        Jump shortcuts move the cursor and return ``None``. Activation
        shortcuts return the bound action and leave the cursor alone.
        """
        document = self._require_document()
        binding = document.shortcuts.get(key)
        if binding is None:
            return None
        if binding.kind is ShortcutKind.JUMP:
            self.cursor = self._clamp(binding.line)
            return None
        return document.action_at(binding.line)
