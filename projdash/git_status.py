"""Git working-tree status for the dashboard's Git section.

Runs ``git`` against a project root and parses the short porcelain listing
into staged, unstaged and untracked change records. A missing ``git`` binary
or a root that is not a working tree yields ``None`` rather than an error.
"""

from __future__ import annotations

import enum
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STAGED_CODES = frozenset("MADRC")
UNSTAGED_CODES = frozenset("MD")
UNTRACKED_CODE = "?"
DETACHED_BRANCH = "HEAD"


class ChangeType(enum.Enum):
    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNKNOWN = "?"

    @classmethod
    def from_code(cls, code: str) -> ChangeType:
        """Map one porcelain status letter to a change type."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ChangeEntry:
    change_type: ChangeType
    path: str


@dataclass(frozen=True)
class GitStatusSnapshot:
    """Branch and change lists for one working tree, in porcelain order."""

    branch: str
    staged: tuple[ChangeEntry, ...] = ()
    unstaged: tuple[ChangeEntry, ...] = ()
    untracked: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.staged) + len(self.unstaged) + len(self.untracked)

    def summary(self) -> str:
        return f"{len(self.staged)} staged, {len(self.unstaged)} unstaged, {len(self.untracked)} untracked"


_C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}
_OCTAL_DIGITS = frozenset("01234567")


def _unquote_path(text: str) -> str:
    """Undo git's C-style quoting of paths with spaces or special bytes."""
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        return text
    body = text[1:-1]
    out = bytearray()
    index = 0
    while index < len(body):
        ch = body[index]
        if ch != "\\" or index + 1 >= len(body):
            out += ch.encode("utf-8")
            index += 1
            continue
        octal = body[index + 1 : index + 4]
        if len(octal) == 3 and set(octal) <= _OCTAL_DIGITS:
            out.append(int(octal, 8) & 0xFF)
            index += 4
            continue
        escaped = body[index + 1]
        out += _C_ESCAPES.get(escaped, escaped).encode("utf-8")
        index += 2
    return out.decode("utf-8", errors="replace")


def _entry_path(code: str, path_text: str) -> str:
    # Renames and copies are listed as "old -> new"; the row should open "new".
    if code in {"R", "C"} and " -> " in path_text:
        path_text = path_text.split(" -> ", 1)[1].strip()
    return _unquote_path(path_text)


def parse_short_status(output: str) -> tuple[list[ChangeEntry], list[ChangeEntry], list[str]]:
    """Split ``git status --porcelain`` output into staged/unstaged/untracked.

    Every line is checked against all three rules, so a file with both an
    index-side and a worktree-side change lands in both ``staged`` and
    ``unstaged``. Lines shorter than three characters are skipped. Paths are
    unquoted, and renames or copies are reported under their new name in
    every list.
    """
    staged: list[ChangeEntry] = []
    unstaged: list[ChangeEntry] = []
    untracked: list[str] = []
    for line in output.splitlines():
        if len(line) < 3:
            continue
        index_code = line[0]
        worktree_code = line[1]
        path = _entry_path(index_code, line[3:].strip())
        if index_code in STAGED_CODES:
            staged.append(ChangeEntry(ChangeType.from_code(index_code), path))
        if worktree_code in UNSTAGED_CODES:
            unstaged.append(ChangeEntry(ChangeType.from_code(worktree_code), path))
        if index_code == UNTRACKED_CODE and worktree_code == UNTRACKED_CODE:
            untracked.append(path)
    return staged, unstaged, untracked


def is_git_available() -> bool:
    return shutil.which("git") is not None


def is_working_tree(root: Path) -> bool:
    # ``.git`` is a directory in normal clones and a file in worktrees/submodules.
    return (root / ".git").exists()


def _run_git(root: Path, args: list[str]) -> str | None:
    """Run one git command in ``root`` and return stdout, or ``None`` on failure."""
    command = ["git", "-C", str(root), "-c", "core.quotePath=false", *args]
    logger.debug("running %s", command)
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed in %s: %s", args[0], root, exc)
        return None
    if proc.returncode != 0:
        logger.debug("git %s exited %d in %s", args[0], proc.returncode, root)
        return None
    return proc.stdout


def get_status(root: Path) -> GitStatusSnapshot | None:
    """Return a fresh status snapshot for ``root``.

    Blocks until both git invocations finish; no timeout is applied. Returns
    ``None`` when git is unavailable, ``root`` is not a working tree, or git
    refuses to report on it.
    """
    root = Path(root)
    if not is_git_available() or not is_working_tree(root):
        return None

    branch_output = _run_git(root, ["branch", "--show-current"])
    if branch_output is None:
        return None
    status_output = _run_git(root, ["status", "--porcelain"])
    if status_output is None:
        return None

    staged, unstaged, untracked = parse_short_status(status_output)
    return GitStatusSnapshot(
        branch=branch_output.strip() or DETACHED_BRANCH,
        staged=tuple(staged),
        unstaged=tuple(unstaged),
        untracked=tuple(untracked),
    )
