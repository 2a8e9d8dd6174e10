"""Rendered dashboard document model.

A document is an ordered list of lines for one project root. Some lines are
activatable (they carry an :class:`~projdash.actions.Action`); shortcuts map
single characters either to such a line or to the start of a section.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from .actions import Action
from .ansi import strip_ansi


class ShortcutConflictError(ValueError):
    """Raised when a shortcut character is bound twice in one document."""


class ShortcutKind(enum.Enum):
    ACTIVATE = "activate"
    JUMP = "jump"


@dataclass(frozen=True)
class ShortcutBinding:
    kind: ShortcutKind
    line: int


@dataclass(frozen=True)
class DocumentLine:
    text: str = ""
    action: Action | None = None
    shortcut: str | None = None
    section: str | None = None
    centered: bool = False

    @property
    def plain(self) -> str:
        return strip_ansi(self.text)

    @property
    def activatable(self) -> bool:
        return self.action is not None


@dataclass
class DashboardDocument:
    """All rendered lines plus shortcut and section tables for one root."""

    root: Path
    lines: list[DocumentLine] = field(default_factory=list)
    sections: dict[str, int] = field(default_factory=dict)
    shortcuts: dict[str, ShortcutBinding] = field(default_factory=dict)
    content_start: int = 0

    def add_line(
        self,
        text: str = "",
        *,
        action: Action | None = None,
        shortcut: str | None = None,
        section: str | None = None,
        centered: bool = False,
    ) -> int:
        """Append a line and return its index.

        A shortcut given here activates the line's action and requires one.
        """
        index = len(self.lines)
        if shortcut is not None:
            if action is None:
                raise ValueError(f"shortcut {shortcut!r} needs an action")
            self._bind(shortcut, ShortcutBinding(ShortcutKind.ACTIVATE, index))
        self.lines.append(
            DocumentLine(text=text, action=action, shortcut=shortcut, section=section, centered=centered)
        )
        return index

    def mark_section(self, name: str, shortcut: str | None = None) -> None:
        """Record the next line to be added as the start of section ``name``."""
        index = len(self.lines)
        self.sections[name] = index
        if shortcut is not None:
            self._bind(shortcut, ShortcutBinding(ShortcutKind.JUMP, index))

    def _bind(self, key: str, binding: ShortcutBinding) -> None:
        if len(key) != 1:
            raise ValueError(f"shortcut must be one character, got {key!r}")
        if key in self.shortcuts:
            raise ShortcutConflictError(f"shortcut {key!r} is already bound")
        self.shortcuts[key] = binding

    def line_count(self) -> int:
        return len(self.lines)

    def action_at(self, index: int) -> Action | None:
        if 0 <= index < len(self.lines):
            return self.lines[index].action
        return None

    def activatable_lines(self) -> list[int]:
        return [index for index, line in enumerate(self.lines) if line.activatable]

    def section_lines(self, name: str) -> list[DocumentLine]:
        return [line for line in self.lines if line.section == name]

    def plain_text(self) -> str:
        return "\n".join(line.plain for line in self.lines)
