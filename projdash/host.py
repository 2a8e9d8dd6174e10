"""Carry out dashboard actions with external programs.

Every program runs in the foreground while the TUI is suspended (raw mode
off, main screen restored). Helpers return an error message string instead
of raising, for UI-friendly handling.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import shlex
import shutil
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path

from .actions import Action, ActionKind
from .capabilities import Capabilities

logger = logging.getLogger(__name__)

DIRECTORY_BROWSERS = ("lf", "ranger", "nnn", "yazi")
DEFAULT_PAGER = "less -R"
DEFAULT_SHELL = "/bin/sh"


def _noop() -> None:
    return None


def _command_from_env(name: str) -> list[str]:
    value = os.environ.get(name, "").strip()
    return shlex.split(value) if value else []


class HostEnvironment:
    """Dispatch :class:`Action` values to editors, shells, pagers and git tools."""

    def __init__(
        self,
        capabilities: Capabilities,
        *,
        directory_browser: str | None = None,
        suspend: Callable[[], None] = _noop,
        resume: Callable[[], None] = _noop,
        prompt: Callable[[str], str] = input,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self.capabilities = capabilities
        self.directory_browser = directory_browser
        self._suspend = suspend
        self._resume = resume
        self._prompt = prompt
        self._which = which
        self._handlers: dict[ActionKind, Callable[[Path], str | None]] = {
            ActionKind.OPEN_FILE: self.open_file,
            ActionKind.OPEN_DIRECTORY: self.open_directory,
            ActionKind.LAUNCH_SHELL: self.launch_shell,
            ActionKind.LAUNCH_SEARCH: self.launch_search,
            ActionKind.FIND_FILE: self.find_file,
            ActionKind.SHOW_VCS_STATUS: self.show_vcs_status,
            ActionKind.SHOW_VCS_FULL: self.show_vcs_full,
        }

    def perform(self, action: Action) -> str | None:
        """Run ``action`` and return an error message, or ``None`` on success."""
        logger.info("performing %s on %s", action.kind.value, action.path)
        return self._handlers[action.kind](action.path)

    @contextlib.contextmanager
    def _suspended(self) -> Iterator[None]:
        self._suspend()
        try:
            yield
        finally:
            self._resume()

    def _ask(self, message: str) -> str | None:
        try:
            answer = self._prompt(message)
        except (EOFError, KeyboardInterrupt):
            return None
        answer = answer.strip()
        return answer or None

    def _run(self, command: list[str], cwd: Path | None) -> str | None:
        logger.debug("launching %s in %s", command, cwd)
        try:
            subprocess.run(command, cwd=cwd, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            return f"Failed to launch {command[0]}: {exc}"
        return None

    def _run_paged(self, command: list[str], cwd: Path) -> str | None:
        pager = _command_from_env("PAGER") or shlex.split(DEFAULT_PAGER)
        logger.debug("launching %s | %s in %s", command, pager, cwd)
        try:
            producer = subprocess.Popen(command, cwd=cwd, stdout=subprocess.PIPE)
        except OSError as exc:
            return f"Failed to launch {command[0]}: {exc}"
        try:
            subprocess.run(pager, cwd=cwd, stdin=producer.stdout, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            return f"Failed to launch {pager[0]}: {exc}"
        finally:
            if producer.stdout is not None:
                producer.stdout.close()
            producer.wait()
        return None

    def _editor_command(self) -> list[str] | str:
        editor = os.environ.get("EDITOR", "").strip()
        if not editor:
            return "Cannot edit: $EDITOR is not set."
        command = shlex.split(editor)
        if not command:
            return "Cannot edit: $EDITOR is empty."
        return command

    def open_file(self, path: Path) -> str | None:
        command = self._editor_command()
        if isinstance(command, str):
            return command
        with self._suspended():
            return self._run([*command, str(path)], None)

    def open_directory(self, path: Path) -> str | None:
        if self.directory_browser:
            command = shlex.split(self.directory_browser)
        else:
            command = next(([name] for name in DIRECTORY_BROWSERS if self._which(name)), [])
        if not command:
            editor = self._editor_command()
            if isinstance(editor, str):
                return "No directory browser found and $EDITOR is not set."
            command = editor
        with self._suspended():
            return self._run([*command, str(path)], path)

    def launch_shell(self, path: Path) -> str | None:
        shell = os.environ.get("SHELL", "").strip() or DEFAULT_SHELL
        with self._suspended():
            return self._run([shell], path)

    def find_file(self, path: Path) -> str | None:
        with self._suspended():
            if self.capabilities.has_fuzzy_finder:
                try:
                    proc = subprocess.run(["fzf"], cwd=path, stdout=subprocess.PIPE, text=True, check=False)
                except (OSError, subprocess.SubprocessError) as exc:
                    return f"Failed to launch fzf: {exc}"
                selection = proc.stdout.strip() if proc.returncode == 0 else ""
            else:
                selection = self._ask(f"Find file in {path}: ") or ""
        if not selection:
            return None
        target = path / selection
        if not target.exists():
            return f"No such file: {selection}"
        return self.open_file(target)

    def launch_search(self, path: Path) -> str | None:
        with self._suspended():
            if self.capabilities.has_fast_search:
                pattern = self._ask("Search (ripgrep): ")
                if pattern is None:
                    return None
                return self._run_paged(
                    ["rg", "--color=always", "--line-number", "--heading", "--", pattern],
                    path,
                )

            pattern = self._ask("Search (regexp): ")
            if pattern is None:
                return None
            try:
                re.compile(pattern)
            except re.error as exc:
                return f"Invalid regexp: {exc}"
            return self._run_paged(
                ["grep", "-rnE", "--color=always", "--exclude-dir=.git", "-e", pattern, "."],
                path,
            )

    def show_vcs_status(self, path: Path) -> str | None:
        if not self.capabilities.has_vcs_ui:
            return "lazygit not found in PATH"
        with self._suspended():
            return self._run(["lazygit"], path)

    def show_vcs_full(self, path: Path) -> str | None:
        if self.capabilities.has_vcs_ui:
            return self.show_vcs_status(path)
        if not self.capabilities.has_vcs:
            return "git not found in PATH"
        with self._suspended():
            return self._run(["git", "--paginate", "status"], path)
