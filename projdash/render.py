"""Dashboard document composition.

Collects git status, scoped recent files and project metadata for a root,
then lays them out as title block, Git, Recent Files, Quick Actions and
footer. Composition is pure: the same sources always produce the same
document, which keeps refresh idempotent.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from . import actions
from .capabilities import Capabilities
from .config import DashboardSettings
from .document import DashboardDocument
from .git_status import ChangeType, GitStatusSnapshot, get_status
from .icons import TAG_WIDTH, file_type_tag
from .metadata import ProjectMetadata, read_metadata
from .recent_files import load_recent_files, recent_files_for
from .ui_theme import DEFAULT_THEME, UITheme

SECTION_GIT = "git"
SECTION_RECENT = "recent"
SECTION_ACTIONS = "actions"

SECTION_SHORTCUTS = {
    SECTION_GIT: "g",
    SECTION_RECENT: "r",
    SECTION_ACTIONS: "a",
}

RECENT_HEADING = "Recent Files"
ACTIONS_HEADING = "Quick Actions"
EMPTY_RECENT_TEXT = "No recent files in this project"
MORE_TEXT = "…more"
FOOTER_TEXT = "q quit  R refresh"
MAX_NUMERIC_SHORTCUTS = 9
CATEGORY_WIDTH = 10
ACTION_LABEL_WIDTH = 20


@dataclass(frozen=True)
class DashboardSources:
    """Everything the layout needs, gathered before composition."""

    root: Path
    git: GitStatusSnapshot | None
    recent: tuple[Path, ...]
    metadata: ProjectMetadata | None


def collect_sources(root: Path, settings: DashboardSettings, capabilities: Capabilities) -> DashboardSources:
    root = Path(root).expanduser().absolute()
    git = get_status(root) if capabilities.has_vcs else None
    recent = recent_files_for(
        root,
        load_recent_files(settings.recent_files_path),
        settings.recent_files_limit,
    )
    return DashboardSources(root=root, git=git, recent=tuple(recent), metadata=read_metadata(root))


def abbreviate_path(path: Path) -> str:
    """Replace the home directory prefix with ``~``."""
    text = str(path)
    home = os.path.expanduser("~")
    if home and home != "/" and (text == home or text.startswith(home + os.sep)):
        return "~" + text[len(home):]
    return text


def display_name(sources: DashboardSources) -> str:
    if sources.metadata is not None and sources.metadata.name:
        return sources.metadata.name
    return sources.root.name or str(sources.root)


def _change_color(change_type: ChangeType, theme: UITheme) -> str:
    return {
        ChangeType.MODIFIED: theme.change_modified,
        ChangeType.ADDED: theme.change_added,
        ChangeType.DELETED: theme.change_deleted,
        ChangeType.RENAMED: theme.change_renamed,
        ChangeType.COPIED: theme.change_copied,
    }.get(change_type, theme.change_unknown)


class DashboardRenderer:
    """Lays out one :class:`DashboardDocument` from collected sources."""

    def __init__(self, capabilities: Capabilities, settings: DashboardSettings, theme: UITheme = DEFAULT_THEME) -> None:
        self.capabilities = capabilities
        self.settings = settings
        self.theme = theme

    def compose(self, sources: DashboardSources) -> DashboardDocument:
        document = DashboardDocument(root=sources.root)
        self._title_block(document, sources)
        document.content_start = document.line_count()
        if sources.git is not None:
            self._git_section(document, sources.root, sources.git)
        self._recent_section(document, sources)
        self._actions_section(document, sources.root)
        document.add_line(f"{self.theme.dim}{FOOTER_TEXT}{self.theme.reset}", centered=True)
        return document

    def _styled(self, style: str, text: str) -> str:
        return f"{style}{text}{self.theme.reset}" if style else text

    def _file_tag(self, path: Path | str) -> str:
        if not self.capabilities.has_icon_provider:
            return ""
        tag = file_type_tag(path)
        return self._styled(self.theme.file_tag, tag.ljust(TAG_WIDTH)) + " "

    def _title_block(self, document: DashboardDocument, sources: DashboardSources) -> None:
        theme = self.theme
        document.add_line(self._styled(theme.title, display_name(sources)), centered=True)
        document.add_line(self._styled(theme.root_path, abbreviate_path(sources.root)), centered=True)
        if sources.metadata is not None and sources.metadata.description:
            document.add_line(self._styled(theme.description, sources.metadata.description), centered=True)
        document.add_line()

    def _git_section(self, document: DashboardDocument, root: Path, snapshot: GitStatusSnapshot) -> None:
        theme = self.theme
        limit = self.settings.git_files_limit
        document.add_line(self._styled(theme.heading, f"Git: {snapshot.branch}"), section=SECTION_GIT)
        document.mark_section(SECTION_GIT, SECTION_SHORTCUTS[SECTION_GIT])

        rows: list[tuple[str, ChangeType, str]] = []
        rows.extend(("staged", entry.change_type, entry.path) for entry in snapshot.staged)
        rows.extend(("unstaged", entry.change_type, entry.path) for entry in snapshot.unstaged)
        rows.extend(("untracked", ChangeType.UNKNOWN, path) for path in snapshot.untracked)
        for label, change_type, rel_path in rows[:limit]:
            indicator = self._styled(_change_color(change_type, theme), change_type.value)
            document.add_line(
                f"  {label.ljust(CATEGORY_WIDTH)}{indicator} {self._file_tag(rel_path)}{rel_path}",
                action=actions.open_file(root / rel_path),
                section=SECTION_GIT,
            )

        document.add_line(f"  {self._styled(theme.dim, snapshot.summary())}", section=SECTION_GIT)
        if snapshot.total > limit:
            document.add_line(
                f"  {self._styled(theme.shortcut, MORE_TEXT)}",
                action=actions.show_vcs_full(root),
                section=SECTION_GIT,
            )
        document.add_line()

    def _recent_section(self, document: DashboardDocument, sources: DashboardSources) -> None:
        theme = self.theme
        document.add_line(self._styled(theme.heading, RECENT_HEADING), section=SECTION_RECENT)
        document.mark_section(SECTION_RECENT, SECTION_SHORTCUTS[SECTION_RECENT])
        if not sources.recent:
            document.add_line(f"  {self._styled(theme.dim, EMPTY_RECENT_TEXT)}", section=SECTION_RECENT)
            document.add_line()
            return

        resolved_root = sources.root.resolve()
        for index, path in enumerate(sources.recent):
            shortcut = str(index + 1) if index < MAX_NUMERIC_SHORTCUTS else None
            key_label = self._styled(theme.shortcut, f"[{shortcut}]") if shortcut else "   "
            shown = path.relative_to(resolved_root) if path.is_relative_to(resolved_root) else path
            document.add_line(
                f"  {key_label} {self._file_tag(path)}{shown}",
                action=actions.open_file(path),
                shortcut=shortcut,
                section=SECTION_RECENT,
            )
        document.add_line()

    def _quick_actions(self, root: Path) -> list[tuple[str, str, actions.Action, str | None]]:
        caps = self.capabilities
        rows: list[tuple[str, str, actions.Action, str | None]] = [
            ("f", "Find file", actions.find_file(root), actions.quick_action_hint("find")),
        ]
        if caps.has_fast_search:
            rows.append(("s", "Search (ripgrep)", actions.launch_search(root), actions.quick_action_hint("search")))
        else:
            rows.append(("s", "Search (regexp)", actions.launch_search(root), None))
        if caps.has_vcs_ui:
            rows.append(("m", "Git status", actions.show_vcs_status(root), actions.quick_action_hint("status")))
        rows.append(("d", "Browse directory", actions.open_directory(root), actions.quick_action_hint("browse")))
        rows.append(("e", "Shell", actions.launch_shell(root), actions.quick_action_hint("shell")))
        return rows

    def _actions_section(self, document: DashboardDocument, root: Path) -> None:
        theme = self.theme
        document.add_line(self._styled(theme.heading, ACTIONS_HEADING), section=SECTION_ACTIONS)
        document.mark_section(SECTION_ACTIONS, SECTION_SHORTCUTS[SECTION_ACTIONS])
        for key, label, action, hint in self._quick_actions(root):
            text = f"  {self._styled(theme.shortcut, f'[{key}]')} {label.ljust(ACTION_LABEL_WIDTH)}"
            if hint:
                text += f" {self._styled(theme.hint, f'({hint})')}"
            document.add_line(text.rstrip(), action=action, shortcut=key, section=SECTION_ACTIONS)
        document.add_line()


def render_dashboard(
    root: Path,
    settings: DashboardSettings,
    capabilities: Capabilities,
    theme: UITheme = DEFAULT_THEME,
) -> DashboardDocument:
    """Collect fresh sources for ``root`` and compose its document.

    Never raises for missing git, metadata or recent files; those sections
    degrade instead.
    """
    sources = collect_sources(root, settings, capabilities)
    return DashboardRenderer(capabilities, settings, theme).compose(sources)
