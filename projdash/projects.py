"""Project root resolution and window launching.

Finds the project containing a directory, lets the user pick one of the
registered projects, and opens a dashboard in a new tmux window.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from .metadata import METADATA_FILENAME

logger = logging.getLogger(__name__)

PROJECT_MARKERS = (".git", ".hg", ".svn", METADATA_FILENAME)


class ProjectNotFoundError(Exception):
    """Raised when no recognized project contains the requested directory."""


def find_project_root(start: Path) -> Path:
    """Walk up from ``start`` to the nearest directory holding a project marker."""
    current = Path(start).expanduser().resolve()
    if current.is_file():
        current = current.parent
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    raise ProjectNotFoundError(f"Not inside a recognized project: {current}")


def prompt_for_project(
    projects: Sequence[Path],
    *,
    prompt: Callable[[str], str] = input,
    output: TextIO | None = None,
) -> Path | None:
    """List ``projects`` and read a choice by number or by path.

    Returns ``None`` when the user enters nothing or closes input.
    """
    out = output if output is not None else sys.stdout
    for number, project in enumerate(projects, start=1):
        out.write(f"{number:>3}  {project}\n")
    out.flush()
    try:
        answer = prompt("Project: ").strip()
    except (EOFError, KeyboardInterrupt):
        return None
    if not answer:
        return None
    if answer.isdigit():
        index = int(answer) - 1
        if 0 <= index < len(projects):
            return Path(projects[index]).expanduser()
        raise ProjectNotFoundError(f"No project numbered {answer}")
    chosen = Path(answer).expanduser()
    if not chosen.is_dir():
        raise ProjectNotFoundError(f"Not a directory: {chosen}")
    return chosen


def is_inside_tmux() -> bool:
    return "TMUX" in os.environ


def open_in_new_window(root: Path, argv: Sequence[str]) -> str | None:
    """Start ``argv`` for ``root`` in a new tmux window.

    Returns an error message when tmux is missing or not running.
    """
    if shutil.which("tmux") is None:
        return "tmux is not installed or not in PATH"
    if not is_inside_tmux():
        return "--new-window needs a running tmux session"
    command = shlex.join([*argv, str(root)])
    logger.info("opening tmux window for %s", root)
    try:
        proc = subprocess.run(
            ["tmux", "new-window", "-n", root.name or str(root), "-c", str(root), command],
            check=False,
        )
    except OSError as exc:
        return f"Failed to launch tmux: {exc}"
    if proc.returncode != 0:
        return f"tmux new-window exited with status {proc.returncode}"
    return None
