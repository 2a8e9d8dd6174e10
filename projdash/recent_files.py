"""Recently-opened files scoped to one project.

The recent-files list is owned by an external recency tracker; this module
only reads it and picks the entries that live under a project root.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .config import DEFAULT_RECENT_FILES_LIMIT

logger = logging.getLogger(__name__)


def load_recent_files(path: Path) -> list[str]:
    """Read the external most-recent-first list.

    Accepts either a JSON array of path strings or plain text with one path
    per line. Missing or unreadable files give an empty list.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("ignoring unreadable recent-files list %s: %s", path, exc)
        return []

    stripped = raw.lstrip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except ValueError as exc:
            logger.debug("ignoring malformed recent-files list %s: %s", path, exc)
            return []
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, str) and item]
    return [line.strip() for line in raw.splitlines() if line.strip()]


def _canonical(path_text: str) -> Path:
    return Path(os.path.expanduser(path_text)).resolve()


def recent_files_for(
    root: Path | str,
    all_recent: Iterable[str | Path],
    limit: int = DEFAULT_RECENT_FILES_LIMIT,
) -> list[Path]:
    """Return up to ``limit`` entries of ``all_recent`` located under ``root``.

    Order is preserved. Matching is by path components, so ``/a/bc`` is not
    under ``/a/b``.
    """
    if limit <= 0:
        return []
    project_root = _canonical(str(root))
    matches: list[Path] = []
    for entry in all_recent:
        candidate = _canonical(str(entry))
        if candidate == project_root or not candidate.is_relative_to(project_root):
            continue
        matches.append(candidate)
        if len(matches) >= limit:
            break
    return matches
