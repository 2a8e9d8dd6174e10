"""Persistent JSON settings for the dashboard.

Stores display limits, the recent-files source, theme, and the registry of
known projects. All access is defensive: malformed or missing config falls
back to defaults, one key at a time.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir, user_state_dir

logger = logging.getLogger(__name__)

APP_NAME = "projdash"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_RECENT_FILES_PATH = Path(user_state_dir(APP_NAME, appauthor=False)) / "recent-files"
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / "projdash.log"

DEFAULT_VIEW_NAME = "projdash"
DEFAULT_RECENT_FILES_LIMIT = 10
DEFAULT_GIT_FILES_LIMIT = 5


@dataclass(frozen=True)
class DashboardSettings:
    """Effective configuration for one dashboard session."""

    view_name: str = DEFAULT_VIEW_NAME
    recent_files_limit: int = DEFAULT_RECENT_FILES_LIMIT
    git_files_limit: int = DEFAULT_GIT_FILES_LIMIT
    recent_files_path: Path = DEFAULT_RECENT_FILES_PATH
    theme: str | None = None
    icons: bool = True
    projects: tuple[Path, ...] = field(default_factory=tuple)
    directory_browser: str | None = None

    def with_overrides(self, **overrides: object) -> DashboardSettings:
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers and values below one fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value >= 1 else default


def _coerce_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _coerce_projects(value: object) -> tuple[Path, ...]:
    if not isinstance(value, list):
        return ()
    projects: list[Path] = []
    for raw in value:
        text = _coerce_text(raw)
        if text is None:
            continue
        path = Path(text).expanduser()
        if path not in projects:
            projects.append(path)
    return tuple(projects)


def load_settings() -> DashboardSettings:
    """Build :class:`DashboardSettings` from the config file.

    Each key is validated on its own; an invalid value keeps that key's
    default without discarding the rest of the file.
    """
    data = load_config()
    recent_path = _coerce_text(data.get("recent_files_path"))
    icons = data.get("icons")
    return DashboardSettings(
        view_name=_coerce_text(data.get("view_name")) or DEFAULT_VIEW_NAME,
        recent_files_limit=_coerce_positive_int(data.get("recent_files_limit"), DEFAULT_RECENT_FILES_LIMIT),
        git_files_limit=_coerce_positive_int(data.get("git_files_limit"), DEFAULT_GIT_FILES_LIMIT),
        recent_files_path=Path(recent_path).expanduser() if recent_path else DEFAULT_RECENT_FILES_PATH,
        theme=_coerce_text(data.get("theme")),
        icons=icons if isinstance(icons, bool) else True,
        projects=_coerce_projects(data.get("projects")),
        directory_browser=_coerce_text(data.get("directory_browser")),
    )
