"""Actions bound to activatable dashboard rows.

Rows carry plain ``Action`` values instead of callbacks; the host environment
decides how each kind is carried out.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class ActionKind(enum.Enum):
    OPEN_FILE = "open-file"
    OPEN_DIRECTORY = "open-directory"
    LAUNCH_SHELL = "launch-shell"
    LAUNCH_SEARCH = "launch-search"
    FIND_FILE = "find-file"
    SHOW_VCS_STATUS = "show-vcs-status"
    SHOW_VCS_FULL = "show-vcs-full"


@dataclass(frozen=True)
class Action:
    """One activatable operation and the path it targets."""

    kind: ActionKind
    path: Path

    @property
    def touches_vcs(self) -> bool:
        """Whether running this action may change the working tree status."""
        return self.kind in {ActionKind.SHOW_VCS_STATUS, ActionKind.SHOW_VCS_FULL}


QUICK_ACTION_KINDS: dict[str, ActionKind] = {
    "find": ActionKind.FIND_FILE,
    "search": ActionKind.LAUNCH_SEARCH,
    "status": ActionKind.SHOW_VCS_STATUS,
    "browse": ActionKind.OPEN_DIRECTORY,
    "shell": ActionKind.LAUNCH_SHELL,
}


def quick_action(name: str, root: Path) -> Action:
    """Build the quick action named on the command line (``projdash -a NAME``)."""
    try:
        kind = QUICK_ACTION_KINDS[name]
    except KeyError:
        raise ValueError(f"unknown quick action: {name!r}") from None
    return Action(kind, Path(root))


def quick_action_hint(name: str) -> str:
    return f"projdash -a {name}"


def open_file(path: Path) -> Action:
    return Action(ActionKind.OPEN_FILE, Path(path))


def open_directory(path: Path) -> Action:
    return Action(ActionKind.OPEN_DIRECTORY, Path(path))


def launch_shell(path: Path) -> Action:
    return Action(ActionKind.LAUNCH_SHELL, Path(path))


def launch_search(path: Path) -> Action:
    return Action(ActionKind.LAUNCH_SEARCH, Path(path))


def find_file(path: Path) -> Action:
    return Action(ActionKind.FIND_FILE, Path(path))


def show_vcs_status(path: Path) -> Action:
    return Action(ActionKind.SHOW_VCS_STATUS, Path(path))


def show_vcs_full(path: Path) -> Action:
    return Action(ActionKind.SHOW_VCS_FULL, Path(path))
