"""Interactive dashboard view and its event loop.

The view draws the controller's current document, keeps the cursor line on
screen, and routes keys: global keys first (quit, refresh, movement,
activation), then the document's own shortcuts, which are rebound from
scratch whenever the document is replaced.
"""

from __future__ import annotations

import logging
import shutil
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .actions import Action
from .ansi import center_ansi_line, clip_ansi_line, strip_ansi
from .capabilities import Capabilities
from .config import DashboardSettings
from .host import HostEnvironment
from .input import parse_mouse_event, read_key
from .keymap import KeyBinding, KeyMap
from .navigation import NavigationController, NavigationError
from .render import render_dashboard
from .terminal import TerminalController
from .ui_theme import UITheme

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.5
INPUT_POLL_MS = 250
WHEEL_SCROLL_LINES = 3
CURSOR_GUTTER = "> "
BLANK_GUTTER = "  "


@dataclass
class ViewState:
    """Mutable screen state that survives refreshes."""

    start: int = 0
    rows: int = 24
    columns: int = 80
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
    quit: bool = False


class DashboardView:
    def __init__(
        self,
        controller: NavigationController,
        host: HostEnvironment,
        theme: UITheme,
        *,
        title: str = "",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.controller = controller
        self.host = host
        self.theme = theme
        self.title = title
        self._clock = clock
        self.state = ViewState()
        self.global_keys = KeyMap(
            KeyBinding(("q", "CTRL_C"), self.quit),
            KeyBinding(("R",), self.refresh),
            KeyBinding(("n", "j", "DOWN", "TAB", "CTRL_N"), self.next_item),
            KeyBinding(("p", "k", "UP", "SHIFT_TAB", "CTRL_P"), self.prev_item),
            KeyBinding(("ENTER_CR", "ENTER_LF"), self.activate_item),
            KeyBinding(("CTRL_L",), self.redraw),
        )
        self.shortcut_keys = KeyMap()

    # -- document lifecycle -------------------------------------------------

    def _bind_document_shortcuts(self) -> None:
        document = self.controller.document
        shortcuts = document.shortcuts if document is not None else {}
        self.shortcut_keys.rebind(KeyBinding((key,), lambda key=key: self.press(key)) for key in shortcuts)

    def open(self) -> None:
        """Render from scratch: cursor and scroll position reset."""
        self.controller.open()
        self._bind_document_shortcuts()
        self.state.start = 0
        self.state.dirty = True

    def refresh(self) -> bool:
        """Re-render keeping cursor and scroll position (both clamped)."""
        self.controller.refresh()
        self._bind_document_shortcuts()
        self.ensure_cursor_visible()
        self.state.dirty = True
        return True

    # -- key handlers -------------------------------------------------------

    def quit(self) -> bool:
        self.state.quit = True
        return True

    def redraw(self) -> bool:
        self.state.dirty = True
        return True

    def next_item(self) -> bool:
        if self.controller.next_item():
            self.state.dirty = True
        return True

    def prev_item(self) -> bool:
        if self.controller.prev_item():
            self.state.dirty = True
        return True

    def activate_item(self) -> bool:
        try:
            action = self.controller.activate_item()
        except NavigationError as exc:
            self.set_status_message(str(exc))
            return True
        self.run_action(action)
        return True

    def press(self, key: str) -> bool:
        action = self.controller.press(key)
        if action is not None:
            self.run_action(action)
        self.state.dirty = True
        return True

    def run_action(self, action: Action) -> None:
        error = self.host.perform(action)
        if error:
            self.set_status_message(error)
        elif action.touches_vcs:
            self.refresh()
        self.state.dirty = True

    def handle_mouse(self, key: str) -> bool:
        event = parse_mouse_event(key)
        if event is None:
            return False
        kind, _col, row = event
        if kind == "MOUSE_WHEEL_UP":
            self.scroll(-WHEEL_SCROLL_LINES)
            return True
        if kind == "MOUSE_WHEEL_DOWN":
            self.scroll(WHEEL_SCROLL_LINES)
            return True
        if kind != "MOUSE_LEFT_DOWN":
            return False
        document = self.controller.document
        line = self.state.start + row - 1
        if document is None or row > self._visible_rows() or not 0 <= line < document.line_count():
            return False
        self.controller.move_to(line)
        self.state.dirty = True
        if document.action_at(line) is not None:
            self.activate_item()
        return True

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; returns whether anything handled it."""
        if key.startswith("MOUSE"):
            return self.handle_mouse(key)
        return self.global_keys.dispatch(key) or self.shortcut_keys.dispatch(key)

    # -- screen -------------------------------------------------------------

    def set_status_message(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def _expire_status_message(self) -> None:
        if self.state.status_message and self._clock() >= self.state.status_message_until:
            self.state.status_message = ""
            self.state.status_message_until = 0.0
            self.state.dirty = True

    def _visible_rows(self) -> int:
        return max(1, self.state.rows - 1)

    def _max_start(self) -> int:
        document = self.controller.document
        count = document.line_count() if document is not None else 0
        return max(0, count - self._visible_rows())

    def scroll(self, delta: int) -> None:
        self.state.start = max(0, min(self.state.start + delta, self._max_start()))
        self.state.dirty = True

    def ensure_cursor_visible(self) -> None:
        visible = self._visible_rows()
        cursor = self.controller.cursor
        start = self.state.start
        if cursor < start:
            start = cursor
        elif cursor >= start + visible:
            start = cursor - visible + 1
        start = max(0, min(start, self._max_start()))
        if start != self.state.start:
            self.state.start = start
            self.state.dirty = True

    def resize(self, columns: int, rows: int) -> None:
        if (columns, rows) != (self.state.columns, self.state.rows):
            self.state.columns = max(1, columns)
            self.state.rows = max(2, rows)
            self.state.dirty = True

    def render_rows(self) -> list[str]:
        """Return the styled screen rows, status row last."""
        theme = self.theme
        columns = self.state.columns
        body_width = max(1, columns - len(CURSOR_GUTTER))
        document = self.controller.document
        lines = document.lines if document is not None else []
        rows: list[str] = []
        for offset in range(self._visible_rows()):
            index = self.state.start + offset
            if index >= len(lines):
                rows.append("")
                continue
            line = lines[index]
            text = center_ansi_line(line.text, body_width) if line.centered else line.text
            if index == self.controller.cursor:
                plain = clip_ansi_line(strip_ansi(text), body_width).ljust(body_width)
                rows.append(f"{CURSOR_GUTTER}{theme.reverse}{plain}{theme.reset}")
            else:
                rows.append(f"{BLANK_GUTTER}{clip_ansi_line(text, body_width)}{theme.reset}")
        message = self.state.status_message
        rows.append(f"{theme.status_error}{clip_ansi_line(message, columns)}{theme.reset}" if message else "")
        return rows

    def render_frame(self) -> str:
        return "\x1b[H" + "\r\n".join(f"{row}\x1b[K" for row in self.render_rows())

    def run(
        self,
        terminal: TerminalController,
        key_reader: Callable[[int, int | None], str] = read_key,
    ) -> None:
        """Open the dashboard and process keys until quit."""
        self.open()
        with terminal.raw_mode():
            if self.title:
                terminal.set_title(self.title)
            while not self.state.quit:
                term = shutil.get_terminal_size((80, 24))
                self.resize(term.columns, term.lines)
                self._expire_status_message()
                self.ensure_cursor_visible()
                if self.state.dirty:
                    terminal.write(self.render_frame())
                    self.state.dirty = False
                key = key_reader(terminal.stdin_fd, INPUT_POLL_MS)
                if key:
                    self.handle_key(key)


def run_dashboard(
    root: Path,
    settings: DashboardSettings,
    capabilities: Capabilities,
    theme: UITheme,
    title: str,
) -> None:
    """Wire terminal, host and controller for ``root`` and run the view."""
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    host = HostEnvironment(
        capabilities,
        directory_browser=settings.directory_browser,
        suspend=terminal.disable_tui_mode,
        resume=terminal.enable_tui_mode,
    )
    controller = NavigationController(lambda: render_dashboard(root, settings, capabilities, theme))
    view = DashboardView(controller, host, theme, title=title)
    logger.info("opening dashboard for %s", root)
    view.run(terminal)
